import math
import subprocess
import sys

from demoqa_verification.config import get_settings

JUNIT_REPORT = "test-results/results.xml"


def _given(*options):
    """True if the caller already passed one of `options` (or its `=value` form)."""
    return any(arg == option or arg.startswith(option) for arg in sys.argv[1:] for option in options)


def main():
    """
    Main entry point for running the full verification suite.
    Executes pytest on the 'demoqa_verification/' package.
    Workers, browser, per-test timeout, reruns, headed mode and the Allure
    results directory come from the environment settings; any command-line
    arguments are passed to pytest and win over the settings.
    """
    settings = get_settings()
    print(f"🚀 Running Books verification against {settings.profile.name} ({settings.base_url})...")

    cmd = [sys.executable, "-m", "pytest", "demoqa_verification/"]

    # Respect an explicit -n / --numprocesses from the caller
    if not _given("-n", "--numprocesses"):
        cmd.extend(["-n", str(settings.workers)])

    if not _given("--browser"):
        cmd.extend(["--browser", settings.browser])

    # pytest-timeout counts seconds
    if not _given("--timeout"):
        cmd.append(f"--timeout={math.ceil(settings.test_timeout / 1000)}")

    if not _given("--reruns"):
        cmd.append(f"--reruns={settings.test_retries}")

    if not _given("--alluredir"):
        cmd.append(f"--alluredir={settings.allure_results_dir}")

    if settings.ci and not _given("--junitxml", "--junit-xml"):
        cmd.append(f"--junitxml={JUNIT_REPORT}")

    if settings.headless is False and not _given("--headed"):
        cmd.append("--headed")

    # sys.argv[0] is the script name, so we take everything after it.
    cmd.extend(sys.argv[1:])

    print(f"Executing: {' '.join(cmd)}")
    result = subprocess.run(cmd)
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
