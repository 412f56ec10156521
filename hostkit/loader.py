"""Task file loader with strict validation."""

from pathlib import Path
from typing import Any, List, Union

import yaml

from .exceptions import TaskValidationError, ValidationError
from .exec.task import TaskRequest


class TaskLoader:
    """Loads a YAML task file into a TaskRequest."""

    SUPPORTED_VERSIONS = {"1"}
    ALLOWED_KEYS = {"version", "executable", "args", "pwd", "env", "input"}

    def __init__(self, base_dir: Union[str, Path, None] = None):
        """
        Initialize loader.

        Args:
            base_dir: Directory that relative `executable`/`pwd` values are
                interpreted against (default: the task file's directory)
        """
        self.base_dir = Path(base_dir).resolve() if base_dir is not None else None
        self.errors: List[ValidationError] = []

    def load(self, task_path: Union[str, Path]) -> TaskRequest:
        """Load and validate a task file."""
        task_path = Path(task_path)
        self.errors = []
        try:
            with open(task_path, 'r') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse task file: {e}")
            self._raise_validation_errors()

        base_dir = self.base_dir or task_path.resolve().parent
        return self.from_dict(document, base_dir)

    def from_dict(self, document: Any, base_dir: Union[str, Path, None] = None) -> TaskRequest:
        """Validate a parsed task document and build the request."""
        self.errors = []

        if document is None or not isinstance(document, dict):
            self._add_error("Task must be a YAML object/dictionary")
            self._raise_validation_errors()

        for key in document:
            if key not in self.ALLOWED_KEYS:
                self._add_error(f"Unknown field '{key}'", str(key))

        version = document.get('version')
        if version is not None:
            if not isinstance(version, str):
                self._add_error(f"'version' must be a string, got {type(version).__name__}", "version")
            elif version not in self.SUPPORTED_VERSIONS:
                self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}", "version")

        executable = document.get('executable')
        if not executable or not isinstance(executable, str):
            self._add_error("'executable' is required and must be a non-empty string", "executable")

        args = document.get('args', [])
        if isinstance(args, str):
            args = [args]
        elif not isinstance(args, list):
            self._add_error(f"'args' must be a string or list, got {type(args).__name__}", "args")
            args = []
        else:
            for index, arg in enumerate(args):
                if not isinstance(arg, str):
                    self._add_error(f"Argument must be a string, got {type(arg).__name__}", f"args[{index}]")

        pwd = document.get('pwd')
        if pwd is not None and not isinstance(pwd, str):
            self._add_error(f"'pwd' must be a string, got {type(pwd).__name__}", "pwd")

        env = document.get('env')
        if env is not None:
            if not isinstance(env, dict):
                self._add_error(f"'env' must be a mapping, got {type(env).__name__}", "env")
            else:
                for key, value in env.items():
                    if not isinstance(key, str) or not isinstance(value, str):
                        self._add_error("Environment keys and values must be strings", f"env.{key}")

        input_text = document.get('input')
        if input_text is not None and not isinstance(input_text, str):
            self._add_error(f"'input' must be a string, got {type(input_text).__name__}", "input")

        self._raise_validation_errors()

        return TaskRequest(
            executable=self._anchor(executable, base_dir),
            args=args,
            pwd=self._anchor(pwd, base_dir) if pwd is not None else None,
            env=env,
            input=input_text,
        )

    def _anchor(self, value: str, base_dir: Union[str, Path, None]) -> str:
        """Interpret a relative path against base_dir; leave ~ paths for expansion."""
        if base_dir is None or value.startswith('~') or Path(value).is_absolute():
            return value
        return str(Path(base_dir) / value)

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        if self.errors:
            raise TaskValidationError(self.errors)


def load_task(task_path: Union[str, Path]) -> TaskRequest:
    """Load a task file into a TaskRequest."""
    return TaskLoader().load(task_path)
