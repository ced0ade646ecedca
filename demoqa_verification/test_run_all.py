from types import SimpleNamespace

import pytest

from demoqa_verification import run_all
from demoqa_verification.config import Settings


@pytest.fixture
def launched(monkeypatch):
    """Runs `run_all.main` with the subprocess replaced; returns the command it built."""
    commands = []

    def fake_run(cmd):
        commands.append(cmd)
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(run_all.subprocess, "run", fake_run)

    def launch(argv, **settings):
        values = {"environment": "dev", **settings}
        monkeypatch.setattr(run_all, "get_settings", lambda: Settings(_env_file=None, **values))
        monkeypatch.setattr(run_all.sys, "argv", ["run_all.py", *argv])
        with pytest.raises(SystemExit) as excinfo:
            run_all.main()
        assert excinfo.value.code == 0
        return commands[-1]

    return launch


def test_defaults_come_from_settings(launched):
    cmd = launched([], workers=3, headless=False, allure_results_dir="out/allure")

    assert cmd[1:4] == ["-m", "pytest", "demoqa_verification/"]
    assert cmd[4:6] == ["-n", "3"]
    assert "--alluredir=out/allure" in cmd
    assert "--headed" in cmd


def test_caller_arguments_win(launched):
    cmd = launched(["-n", "2", "--alluredir=mine", "-m", "smoke"], workers=4, headless=None)

    assert cmd.count("-n") == 1
    assert "--alluredir=allure-results" not in cmd
    assert "--headed" not in cmd
    assert cmd[-5:] == ["-n", "2", "--alluredir=mine", "-m", "smoke"]


def test_browser_timeout_and_reruns_come_from_settings(launched):
    cmd = launched([], environment="prod", browser="firefox", timeout=1234, retries=3, ci=True)

    assert cmd[cmd.index("--browser") + 1] == "firefox"
    assert "--timeout=2" in cmd
    assert "--reruns=3" in cmd
    assert "--junitxml=test-results/results.xml" in cmd


def test_timeout_and_reruns_fall_back_to_the_profile(launched):
    cmd = launched([], environment="staging", timeout=None, retries=None, ci=False)

    assert "--timeout=45" in cmd
    assert "--reruns=2" in cmd
    assert not any(arg.startswith("--junitxml") for arg in cmd)


def test_caller_timeout_and_browser_are_kept(launched):
    cmd = launched(["--browser", "webkit", "--timeout=5", "--reruns=0"], browser="firefox")

    assert cmd.count("--browser") == 1
    assert cmd[-4:] == ["--browser", "webkit", "--timeout=5", "--reruns=0"]
    assert not any(arg.startswith("--timeout=") and arg != "--timeout=5" for arg in cmd)
