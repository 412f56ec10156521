"""Request and result records for one process execution."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

ArgsLike = Union[str, Sequence[str], None]


def normalize_args(args: ArgsLike) -> Tuple[str, ...]:
    """
    Convert caller-supplied arguments to a tuple of literal strings.

    A single string is one argument; it is never split on whitespace.

    Raises:
        TypeError: If any argument is not a string
    """
    if args is None:
        return ()
    if isinstance(args, str):
        return (args,)
    if isinstance(args, (bytes, bytearray)):
        raise TypeError("Arguments must be str, not bytes")

    normalized = tuple(args)
    for index, arg in enumerate(normalized):
        if not isinstance(arg, str):
            raise TypeError(
                f"Argument {index} must be a string, got {type(arg).__name__}"
            )
    return normalized


@dataclass
class TaskRequest:
    """A single process invocation, constructed per call."""
    executable: Union[str, Path]
    args: Tuple[str, ...] = ()
    pwd: Optional[Union[str, Path]] = None
    env: Optional[Dict[str, str]] = None  # Replaces the inherited environment
    input: Optional[str] = None

    def __post_init__(self):
        self.args = normalize_args(self.args)
        if self.env is not None:
            self.env = _normalize_env(self.env)
        if self.input is not None and not isinstance(self.input, str):
            raise TypeError(f"Input must be a string, got {type(self.input).__name__}")

    @property
    def argv(self) -> Tuple[str, ...]:
        return (str(self.executable),) + self.args


@dataclass(frozen=True)
class TaskResult:
    """Outcome of a finished child process."""
    exit_code: int
    out_text: str = ""
    err_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "exit_code": self.exit_code,
            "out_text": self.out_text,
            "err_text": self.err_text,
        }


def _normalize_env(env: Mapping[str, str]) -> Dict[str, str]:
    normalized: Dict[str, str] = {}
    for key, value in env.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(f"Environment entries must be strings: {key!r}={value!r}")
        if not key or "=" in key:
            raise ValueError(f"Invalid environment variable name: {key!r}")
        normalized[key] = value
    return normalized
