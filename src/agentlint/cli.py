"""agentlintのコマンドラインインターフェース。

Usage:
    $ agentlint validate .github/agents --ignore-rules body-empty
    $ agentlint validate my.agent.md --format github-actions --fail-on-warning
    $ agentlint rules
    $ agentlint serve
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import typer

from agentlint.config import ValidatorConfig
from agentlint.logging import configure_logging
from agentlint.models.errors import AgentLintError, AgentPathError
from agentlint.models.validation import RunResult, ValidateOptions
from agentlint.services.validation import ValidationService
from agentlint.validators.rules import load_rule_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="Validate agent definition files (.agent.md) with YAML frontmatter.")


class OutputFormat(str, Enum):
    human = "human"
    json = "json"
    github_actions = "github-actions"


def _build_service(config: ValidatorConfig) -> ValidationService:
    try:
        return ValidationService(load_rule_table(config.rules_file))
    except AgentLintError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def _print_human(run: RunResult) -> None:
    for result in run.file_results:
        if result.errors or result.warnings:
            typer.echo(f"\n{result.file}:")
        for issue in result.errors:
            line_info = f":{issue.line}" if issue.line is not None else ""
            typer.echo(f"  ERROR{line_info} [{issue.rule_id or '-'}]: {issue.message}")
        for issue in result.warnings:
            line_info = f":{issue.line}" if issue.line is not None else ""
            typer.echo(f"  WARNING{line_info} [{issue.rule_id or '-'}]: {issue.message}")
        if result.valid and not result.warnings:
            typer.echo(f"✓ {result.file_name} is valid")
        elif result.valid:
            typer.echo(f"✓ {result.file_name} is valid (with warnings)")

    typer.echo("---")
    typer.echo(f"Files validated: {run.files_validated}")
    typer.echo(f"Errors: {len(run.errors)}")
    typer.echo(f"Warnings: {len(run.warnings)}")


def _escape_data(value: str) -> str:
    """ワークフローコマンドのメッセージ部をエスケープする。"""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    """ワークフローコマンドのプロパティ値をエスケープする。"""
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _annotation(command: str, message: str, **properties: object) -> str:
    props = ",".join(f"{key}={_escape_property(str(value))}" for key, value in properties.items())
    head = f"::{command} {props}" if props else f"::{command}"
    return f"{head}::{_escape_data(message)}"


def _print_github_actions(run: RunResult) -> None:
    for result in run.file_results:
        for command, issues in (("error", result.errors), ("warning", result.warnings)):
            for issue in issues:
                typer.echo(
                    _annotation(
                        command,
                        f"[{result.file_name}] {issue.message}",
                        file=issue.file,
                        line=issue.line or 1,
                        title=issue.rule_id or "agentlint",
                    )
                )


def _write_github_output(
    output_file: Path,
    valid: bool,
    errors: list[dict[str, Any]],
    warnings: list[dict[str, Any]],
    files: int,
) -> None:
    """GitHub Actionsのステップ出力を追記する。"""
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"valid={str(valid).lower()}\n")
        f.write(f"errors={json.dumps(errors)}\n")
        f.write(f"warnings={json.dumps(warnings)}\n")
        f.write(f"files-validated={files}\n")


@app.command("validate")
def validate(
    path: Path | None = typer.Argument(None, help="Agent file or directory (default: AGENTLINT_PATH or '.')"),
    fail_on_warning: bool | None = typer.Option(
        None, "--fail-on-warning/--no-fail-on-warning", help="Treat warnings as failures"
    ),
    ignore_rules: str | None = typer.Option(None, "--ignore-rules", help="Comma-separated rule ids to ignore"),
    validate_references: bool | None = typer.Option(
        None, "--validate-references/--no-validate-references", help="Check that relative links exist"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.human, "--format", help="Output format"),
) -> None:
    """エージェント定義ファイルを検証する。

    CLIオプションが指定されない項目は環境変数 (AGENTLINT_*) の設定値を使う。
    """
    config = ValidatorConfig()
    configure_logging(config.log_level, json_format=config.log_json)

    target = path if path is not None else config.path
    if fail_on_warning is None:
        fail_on_warning = config.fail_on_warning
    if validate_references is None:
        validate_references = config.validate_references
    if ignore_rules is not None:
        config = config.model_copy(update={"ignore_rules": ignore_rules})

    options = ValidateOptions(
        ignore_rules=frozenset(config.ignore_rule_ids()),
        validate_references=validate_references,
    )

    logger.info("Validating agent files in: %s", target)
    if options.ignore_rules:
        logger.info("Ignoring rules: %s", ", ".join(sorted(options.ignore_rules)))
    if options.validate_references:
        logger.info("Reference validation enabled")

    service = _build_service(config)
    try:
        run = service.validate_path(target, options, fail_on_warning=fail_on_warning)
    except AgentPathError as e:
        if output_format is OutputFormat.github_actions:
            typer.echo(_annotation("error", str(e), title=e.rule_id or "agentlint"))
        else:
            typer.echo(f"Error: {e}", err=True)
        if config.github_output is not None:
            _write_github_output(config.github_output, False, [{"message": str(e)}], [], 0)
        raise typer.Exit(code=1) from e

    if output_format is OutputFormat.json:
        typer.echo(run.model_dump_json(indent=2))
    elif output_format is OutputFormat.github_actions:
        _print_github_actions(run)
    else:
        _print_human(run)

    if config.github_output is not None:
        _write_github_output(
            config.github_output,
            run.valid,
            [issue.model_dump(mode="json") for issue in run.errors],
            [issue.model_dump(mode="json") for issue in run.warnings],
            run.files_validated,
        )

    if not run.valid:
        if run.errors:
            logger.error("Validation failed with %d error(s)", len(run.errors))
        else:
            logger.error("Validation failed with %d warning(s) (fail-on-warning enabled)", len(run.warnings))
        raise typer.Exit(code=1)

    logger.info("All agent files are valid")


@app.command("rules")
def list_rules() -> None:
    """ルールテーブルの一覧を表示する。"""
    config = ValidatorConfig()
    service = _build_service(config)
    for rule in service.rule_table:
        typer.echo(f"{rule.id:<34} {rule.severity:<8} {rule.message}")


@app.command("serve")
def serve() -> None:
    """MCPサーバーをstdioで起動する。"""
    from agentlint.server import create_server

    config = ValidatorConfig()
    configure_logging(config.log_level, json_format=config.log_json)
    create_server(config).run()
