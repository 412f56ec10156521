"""Tests for YAML task file loading and validation."""

from pathlib import Path

import pytest
import yaml

from hostkit.exceptions import TaskValidationError
from hostkit.loader import TaskLoader, load_task


def write_task(path: Path, content) -> Path:
    with open(path, 'w') as f:
        yaml.dump(content, f)
    return path


class TestTaskLoader:
    """TaskLoader builds TaskRequests from YAML documents."""

    def test_full_task_loaded(self, tmp_path):
        task_file = write_task(tmp_path / "task.yaml", {
            'version': '1',
            'executable': '/bin/cat',
            'args': ['-n'],
            'pwd': '/tmp',
            'env': {'LANG': 'C'},
            'input': 'hello',
        })

        request = load_task(task_file)

        assert request.executable == '/bin/cat'
        assert request.args == ('-n',)
        assert request.pwd == '/tmp'
        assert request.env == {'LANG': 'C'}
        assert request.input == 'hello'

    def test_minimal_task(self, tmp_path):
        request = load_task(write_task(tmp_path / "t.yaml", {'executable': '/bin/true'}))

        assert request.args == ()
        assert request.pwd is None
        assert request.env is None
        assert request.input is None

    def test_string_args_is_single_argument(self, tmp_path):
        request = load_task(write_task(tmp_path / "t.yaml", {
            'executable': '/bin/echo',
            'args': 'one two',
        }))
        assert request.args == ('one two',)

    def test_relative_paths_anchored_to_task_file(self, tmp_path):
        subdir = tmp_path / "tasks"
        subdir.mkdir()
        request = load_task(write_task(subdir / "t.yaml", {
            'executable': 'bin/tool',
            'pwd': 'work',
        }))

        assert request.executable == str(subdir.resolve() / 'bin/tool')
        assert request.pwd == str(subdir.resolve() / 'work')

    def test_tilde_paths_left_for_expansion(self, tmp_path):
        request = load_task(write_task(tmp_path / "t.yaml", {'executable': '~/bin/tool'}))
        assert request.executable == '~/bin/tool'

    def test_errors_collected_together(self, tmp_path):
        task_file = write_task(tmp_path / "t.yaml", {
            'version': '9',
            'args': [1, 'ok'],
            'env': {'A': 1},
            'shell': True,
        })

        with pytest.raises(TaskValidationError) as exc_info:
            load_task(task_file)

        error = exc_info.value
        assert error.exit_code == 2
        paths = {e.path for e in error.errors}
        assert {'version', 'executable', 'args[0]', 'env.A', 'shell'} <= paths

    def test_non_mapping_document_rejected(self, tmp_path):
        task_file = tmp_path / "t.yaml"
        task_file.write_text("- just\n- a list\n")

        with pytest.raises(TaskValidationError, match="YAML object"):
            load_task(task_file)

    def test_malformed_yaml_rejected(self, tmp_path):
        task_file = tmp_path / "t.yaml"
        task_file.write_text("executable: [unclosed\n")

        with pytest.raises(TaskValidationError, match="Failed to parse"):
            load_task(task_file)

    def test_from_dict_without_base_dir(self):
        request = TaskLoader().from_dict({'executable': 'tool'})
        assert request.executable == 'tool'
