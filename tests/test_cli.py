"""Tests for the hostkit command line."""

import errno
import json
import os
from unittest.mock import patch

import pytest
import yaml

from hostkit.cli.main import create_parser, main


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep the developer's own config out of CLI runs."""
    monkeypatch.delenv("HOSTKIT_CONFIG", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))


class TestParser:
    """Argument parsing."""

    def test_run_passes_dash_arguments_to_child(self):
        args = create_parser().parse_args(['run', '--pwd', '/tmp', '/bin/ls', '-l', '--all'])

        assert args.executable == '/bin/ls'
        assert args.args == ['-l', '--all']
        assert args.pwd == '/tmp'

    def test_input_options_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['run', '--input', 'a', '--input-file', 'b', '/bin/cat'])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert 'usage' in capsys.readouterr().out


class TestRunCommand:
    """hostkit run."""

    def test_output_relayed(self, cat_path, capsys):
        code = main(['run', '--input', 'abc', cat_path])

        assert code == 0
        assert capsys.readouterr().out == 'abc\n'

    def test_child_exit_code_returned(self, python_path, capsys):
        code = main(['run', python_path, '-c', 'import sys; print("x", file=sys.stderr); sys.exit(3)'])

        assert code == 3
        assert capsys.readouterr().err.endswith('x\n')

    def test_signal_exit_mapped(self, python_path):
        code = main(['run', python_path, '-c', 'import os, signal; os.kill(os.getpid(), signal.SIGKILL)'])
        assert code == 128 + 9

    def test_json_output(self, env_path, capsys):
        code = main(['run', '--json', '--env', 'FOO=bar', env_path])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            'exit_code': 0,
            'out_text': 'FOO=bar',
            'err_text': '',
        }

    def test_env_file_and_flags_merge(self, env_path, tmp_path, capsys):
        env_file = tmp_path / 'env.json'
        env_file.write_text(json.dumps({'A': '1', 'B': '2'}))

        main(['run', '--env-file', str(env_file), '--env', 'B=3', env_path])

        assert sorted(capsys.readouterr().out.split()) == ['A=1', 'B=3']

    def test_input_file(self, cat_path, tmp_path, capsys):
        source = tmp_path / 'in.txt'
        source.write_text('from file\n')

        main(['run', '--input-file', str(source), cat_path])
        assert capsys.readouterr().out == 'from file\n'

    def test_missing_executable_exit_127(self, tmp_path):
        assert main(['run', str(tmp_path / 'missing')]) == 127

    def test_not_executable_exit_126(self, tmp_path):
        plain = tmp_path / 'plain'
        plain.write_text('')
        plain.chmod(0o644)

        assert main(['run', str(plain)]) == 126

    def test_task_file(self, cat_path, tmp_path, capsys):
        task_file = tmp_path / 'task.yaml'
        with open(task_file, 'w') as f:
            yaml.dump({'version': '1', 'executable': cat_path, 'input': 'tasked'}, f)

        assert main(['run', '--task', str(task_file)]) == 0
        assert capsys.readouterr().out == 'tasked\n'

    def test_invalid_task_file(self, tmp_path):
        task_file = tmp_path / 'task.yaml'
        task_file.write_text('args: [1]\n')

        assert main(['run', '--task', str(task_file)]) == 2

    def test_executable_required(self):
        assert main(['run']) == 2

    def test_bad_env_flag(self, env_path):
        assert main(['run', '--env', 'NOEQUALS', env_path]) == 2


class TestWhichCommand:
    """hostkit which."""

    def test_found(self, which_path, capsys):
        assert main(['which', 'ls']) == 0
        assert os.path.basename(capsys.readouterr().out.strip()) == 'ls'

    def test_not_found(self, which_path):
        assert main(['which', 'not-a-real-executable-xyz']) == 1

    def test_found_only_prints_nothing(self, which_path, capsys):
        assert main(['which', '--found-only', 'ls']) == 0
        assert main(['which', '--found-only', 'not-a-real-executable-xyz']) == 1
        assert capsys.readouterr().out == ''

    def test_search_tool_from_config(self, tmp_path, capsys):
        fake_which = tmp_path / 'fake-which'
        fake_which.write_text('#!/bin/sh\necho "/fake/bin/$1"\n')
        fake_which.chmod(0o755)
        config = tmp_path / 'config.yaml'
        config.write_text(f'resolver:\n  search_tool: {fake_which}\n')

        assert main(['which', '--config', str(config), 'anything']) == 0
        assert capsys.readouterr().out == '/fake/bin/anything\n'


class TestFsCommand:
    """hostkit fs."""

    def test_mkdir_and_list(self, tmp_path, capsys):
        target = tmp_path / 'made'

        assert main(['fs', 'mkdir', str(target)]) == 0
        (target / 'file.txt').write_text('x')
        capsys.readouterr()

        assert main(['fs', 'list', str(target)]) == 0
        assert capsys.readouterr().out == f'{target / "file.txt"}\n'

    def test_trash_uses_xdg_trash(self, tmp_path, capsys):
        victim = tmp_path / 'victim.txt'
        victim.write_text('x')

        assert main(['fs', 'trash', str(victim)]) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / 'xdg' / 'Trash' / 'files' / 'victim.txt')

    def test_copy_conflict_fails(self, tmp_path):
        (tmp_path / 'a.txt').write_text('a')
        dest = tmp_path / 'dest'
        dest.mkdir()
        (dest / 'a.txt').write_text('existing')

        assert main(['fs', 'copy', str(tmp_path / 'a.txt'), str(dest)]) == 1
        assert main(['fs', 'copy', '--replace', str(tmp_path / 'a.txt'), str(dest)]) == 0

    def test_rename_invalid_name(self, tmp_path):
        (tmp_path / 'a.txt').write_text('a')
        assert main(['fs', 'rename', str(tmp_path / 'a.txt'), 'x/y']) == 2


class TestTagsCommand:
    """hostkit tags."""

    def test_set_then_get(self, tmp_path, capsys):
        store = {}

        def getxattr(path, name):
            if (path, name) not in store:
                raise OSError(errno.ENODATA, 'No data available')
            return store[(path, name)]

        def setxattr(path, name, value):
            store[(path, name)] = value

        target = tmp_path / 'f.txt'
        target.write_text('')
        with patch('hostkit.tags.require_extended_attributes'), \
                patch.object(os, 'getxattr', getxattr, create=True), \
                patch.object(os, 'setxattr', setxattr, create=True):
            assert main(['tags', 'set', str(target), 'red', 'blue']) == 0
            assert main(['tags', 'get', str(target)]) == 0

        assert capsys.readouterr().out == 'red\nblue\nred\nblue\n'

    def test_comma_tag_rejected(self, tmp_path):
        target = tmp_path / 'f.txt'
        target.write_text('')
        with patch('hostkit.tags.require_extended_attributes'):
            assert main(['tags', 'set', str(target), 'a,b']) == 2


class TestTextCommand:
    """hostkit text."""

    def test_dates_json(self, capsys):
        assert main(['text', 'dates', 'Launch on 2024-05-06.']) == 0

        (match,) = json.loads(capsys.readouterr().out)
        assert match['value'] == '2024-05-06'
        assert match['kind'] == 'date'

    def test_tokens_from_stdin(self, capsys, monkeypatch):
        import io
        monkeypatch.setattr('sys.stdin', io.StringIO('One. Two!'))

        assert main(['text', 'tokens', '--unit', 'sentence']) == 0
        assert json.loads(capsys.readouterr().out) == ['One.', 'Two!']


class TestConfigErrors:
    """Config problems stop the CLI before any command runs."""

    def test_invalid_config_exit_2(self, tmp_path):
        config = tmp_path / 'bad.yaml'
        config.write_text('unknown_section: {}\n')

        assert main(['text', 'tokens', 'x', '--config', str(config)]) == 2

    def test_missing_config_exit_1(self, tmp_path):
        assert main(['text', 'tokens', 'x', '--config', str(tmp_path / 'nope.yaml')]) == 1
