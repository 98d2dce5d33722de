"""エージェント定義ファイルの検証を統括するサービス。"""

import logging
from collections.abc import Iterable
from pathlib import Path

from agentlint.models.validation import (
    FileValidationResult,
    ParsedDocument,
    ParseFailure,
    RunResult,
    ValidateOptions,
    ValidationIssue,
)
from agentlint.services.discovery import is_legacy_chatmode, resolve_agent_paths
from agentlint.validators.body import check_body, check_references
from agentlint.validators.collector import IssueCollector
from agentlint.validators.fields import validate_fields
from agentlint.validators.frontmatter import parse_agent_file, parse_agent_text
from agentlint.validators.rules import RuleTable

logger = logging.getLogger(__name__)


class ValidationService:
    """パーサー、フィールドバリデータ、本文バリデータを順に実行し結果を集約する。"""

    def __init__(self, rule_table: RuleTable) -> None:
        self._rule_table = rule_table

    @property
    def rule_table(self) -> RuleTable:
        return self._rule_table

    def _failure_result(self, file: str, failure: ParseFailure) -> FileValidationResult:
        """構造的な失敗を唯一のエラーとする結果を作る。無視リストの対象外。"""
        if failure.rule_id is None:
            issue = ValidationIssue(
                rule_id=None, message=failure.message, severity="error", file=file, line=failure.line
            )
        else:
            issue = ValidationIssue(
                rule_id=failure.rule_id,
                message=self._rule_table.render(failure.rule_id, failure.message),
                severity=self._rule_table.severity(failure.rule_id),
                file=file,
                line=failure.line,
            )
        return FileValidationResult(file=file, errors=[issue])

    def _validate_parsed(
        self,
        parsed: ParsedDocument | ParseFailure,
        file: str,
        base_dir: Path,
        options: ValidateOptions,
    ) -> FileValidationResult:
        if isinstance(parsed, ParseFailure):
            logger.debug("Parse failure in %s: %s", file, parsed.message)
            return self._failure_result(file, parsed)

        collector = IssueCollector(self._rule_table, file, options.ignore_rules)
        collector.extend(validate_fields(parsed))
        collector.extend(check_body(parsed.body))
        if options.validate_references:
            collector.extend(check_references(parsed.body, base_dir))
        return collector.result()

    def validate_text(
        self,
        content: str,
        file: str,
        base_dir: Path,
        options: ValidateOptions | None = None,
    ) -> FileValidationResult:
        """ファイル内容を直接検証する。リンクはbase_dirを基準に解決する。"""
        options = options or ValidateOptions()
        return self._validate_parsed(parse_agent_text(content), file, base_dir, options)

    def validate_file(self, file_path: Path, options: ValidateOptions | None = None) -> FileValidationResult:
        """1ファイルを検証する。"""
        options = options or ValidateOptions()
        if is_legacy_chatmode(file_path):
            logger.info("Note: %s uses legacy .chatmode.md extension", file_path.name)
        return self._validate_parsed(parse_agent_file(file_path), str(file_path), file_path.parent, options)

    def validate_files(
        self,
        file_paths: Iterable[Path],
        options: ValidateOptions | None = None,
        fail_on_warning: bool = False,
    ) -> RunResult:
        """複数ファイルを順に検証し、実行全体の結果に集約する。

        1ファイルの検証中に発生した想定外の例外はそのファイルのエラーに変換し、
        残りのファイルの検証は継続する。
        """
        options = options or ValidateOptions()
        results: list[FileValidationResult] = []
        for file_path in file_paths:
            logger.info("Validating: %s", file_path.name)
            try:
                result = self.validate_file(file_path, options)
            except Exception as e:
                logger.exception("Unexpected error while validating %s", file_path)
                result = self._failure_result(
                    str(file_path), ParseFailure(message=f"Unexpected error during validation: {e}")
                )
            results.append(result)
        return RunResult(file_results=results, fail_on_warning=fail_on_warning)

    def validate_path(
        self,
        path: Path,
        options: ValidateOptions | None = None,
        fail_on_warning: bool = False,
    ) -> RunResult:
        """パスを解決し、見つかった全ファイルを検証する。

        Raises:
            AgentPathError: 検証対象のファイルを解決できない場合。
        """
        files = resolve_agent_paths(path)
        logger.info("Found %d agent file(s) to validate", len(files))
        return self.validate_files(files, options, fail_on_warning)
