import subprocess
import sys

import pytest

from puredns.shellexecutor import ShellExecutor


def test_shell_success_runs_program(tmp_path):
    target = tmp_path / "out.txt"
    script = "import sys; open(sys.argv[1], 'w').write('ok')"

    ShellExecutor().shell(sys.executable, "-c", script, str(target))

    assert target.read_text() == "ok"


@pytest.mark.parametrize("code", [1, 3])
def test_shell_exit_code_raises(code):
    with pytest.raises(subprocess.CalledProcessError) as info:
        ShellExecutor().shell(sys.executable, "-c", f"import sys; sys.exit({code})")
    assert info.value.returncode == code


def test_shell_missing_program(tmp_path):
    with pytest.raises(FileNotFoundError):
        ShellExecutor().shell(str(tmp_path / "does-not-exist"))