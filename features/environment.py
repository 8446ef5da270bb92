from __future__ import annotations

import contextlib
import io
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from wordchain.cli import main as wordchain_main


@dataclass
class RunResult:
    """
    Captured command-line interface execution result.

    :ivar returncode: Process exit code.
    :vartype returncode: int
    :ivar stdout: Captured standard output.
    :vartype stdout: str
    :ivar stderr: Captured standard error.
    :vartype stderr: str
    """

    returncode: int
    stdout: str
    stderr: str


def run_wordchain(context, args: Sequence[str]) -> RunResult:
    """
    Run the Wordchain command-line interface in-process inside the scenario working directory.

    :param context: Behave context object.
    :type context: object
    :param args: Command-line interface argument list.
    :type args: Sequence[str]
    :return: Captured execution result.
    :rtype: RunResult
    """
    out = io.StringIO()
    err = io.StringIO()
    prev_cwd = os.getcwd()
    try:
        os.chdir(str(context.workdir))
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            try:
                code = int(wordchain_main(list(args)) or 0)
            except SystemExit as e:
                code = e.code if isinstance(e.code, int) else 1
    finally:
        os.chdir(prev_cwd)
    result = RunResult(returncode=code, stdout=out.getvalue(), stderr=err.getvalue())
    context.last_result = result
    return result


def before_scenario(context, scenario) -> None:
    """
    Behave hook executed before each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    context._tmp = tempfile.TemporaryDirectory(prefix="wordchain-bdd-")
    context.workdir = Path(context._tmp.name)
    context.chain = None
    context.last_result = None
    context.run_wordchain = lambda args: run_wordchain(context, args)


def after_scenario(context, scenario) -> None:
    """
    Behave hook executed after each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    tmp = getattr(context, "_tmp", None)
    if tmp is not None:
        tmp.cleanup()
        context._tmp = None
