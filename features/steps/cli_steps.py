from __future__ import annotations

import shlex

from behave import given, then, when


@given('a corpus file "{name}" with lines:')
def step_corpus_file(context, name: str) -> None:
    lines = [row["line"] for row in context.table]
    (context.workdir / name).write_text("\n".join(lines) + "\n", encoding="utf-8")


@given('a file "{name}" containing:')
def step_file_containing(context, name: str) -> None:
    (context.workdir / name).write_text(context.text, encoding="utf-8")


@when('I run "{command}"')
def step_run_command(context, command: str) -> None:
    context.run_wordchain(shlex.split(command))


@then("the command succeeds")
def step_command_succeeds(context) -> None:
    result = context.last_result
    assert result.returncode == 0, result.stderr


@then("the command exits with code {code:d}")
def step_command_exit_code(context, code: int) -> None:
    result = context.last_result
    assert result.returncode == code, (result.returncode, result.stderr)


@then('every output line starts with "{prefix}"')
def step_output_prefix(context, prefix: str) -> None:
    lines = context.last_result.stdout.splitlines()
    assert lines
    for line in lines:
        assert line.startswith(prefix), line


@then('standard error mentions "{text}"')
def step_stderr_mentions(context, text: str) -> None:
    assert text in context.last_result.stderr, context.last_result.stderr
