"""Runs the suite through pytest with settings passed as environment."""

import os
import re
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..config import CONFIG_ENV_VAR, Settings

CAPTURE_PLUGIN = "storefront_e2e.plugins.capture"


@dataclass
class RunOptions:
    """What to run and how."""

    suite: Path = Path("tests")
    mock: bool | None = None
    e2e: bool = False
    headed: bool = False
    browser: str | None = None
    keyword: str | None = None
    extra_args: list[str] = field(default_factory=list)


@dataclass
class RunResult:
    success: bool
    return_code: int
    output: str
    failed_tests: list[str]


class PytestRunner:
    """Build and run the pytest command for a suite."""

    def __init__(self, settings: Settings, config_path: Path | None = None):
        self.settings = settings
        self.config_path = config_path

    def build_command(self, options: RunOptions) -> list[str]:
        cmd = [sys.executable, "-m", "pytest", str(options.suite), "-p", CAPTURE_PLUGIN, "-v"]
        if options.e2e:
            cmd.append("--e2e")
        if options.keyword:
            cmd.extend(["-k", options.keyword])
        cmd.extend(options.extra_args)
        return cmd

    def build_env(self, options: RunOptions) -> dict[str, str]:
        """Environment for the pytest process, overriding settings from the options."""
        use_mock = self.settings.use_mock if options.mock is None else options.mock
        env = {
            **os.environ,
            "STOREFRONT_BASE_URL": self.settings.base_url,
            "STOREFRONT_USE_MOCK": "1" if use_mock else "0",
            "PYTHONPATH": f"{os.getcwd()}{os.pathsep}{os.environ.get('PYTHONPATH', '')}",
        }
        if self.config_path:
            env[CONFIG_ENV_VAR] = str(self.config_path.resolve())
        if options.headed:
            env["STOREFRONT_BROWSER__HEADLESS"] = "0"
        if options.browser:
            env["STOREFRONT_BROWSER__NAME"] = options.browser
        return env

    def run(self, options: RunOptions) -> RunResult:
        """Run pytest and collect the failed test ids from its output."""
        result = subprocess.run(
            self.build_command(options),
            capture_output=True,
            cwd=Path.cwd(),
            text=True,
            env=self.build_env(options),
        )
        output = result.stdout + "\n" + result.stderr
        return RunResult(
            success=result.returncode == 0,
            return_code=result.returncode,
            output=output,
            failed_tests=parse_failed_tests(output),
        )


def parse_failed_tests(output: str) -> list[str]:
    """Test ids from pytest's ``FAILED path::name`` summary lines."""
    failed = []
    for match in re.finditer(r"^(?:FAILED|ERROR)\s+(\S+::\S+)", output, re.MULTILINE):
        if match.group(1) not in failed:
            failed.append(match.group(1))
    return failed
