"""検出結果の収集。"""

from collections.abc import Iterable

from agentlint.models.validation import FileValidationResult, RuleId, ValidationIssue
from agentlint.validators.rules import RuleTable

# バリデータが返す生の検出結果: (ルールID, 詳細値)
RawIssue = tuple[RuleId, str | None]


class IssueCollector:
    """1ファイル分のエラーと警告を蓄積する。

    無視リストに含まれるルールは生成時点で破棄され、件数にもメッセージにも現れない。
    """

    def __init__(self, rule_table: RuleTable, file: str, ignore_rules: Iterable[str] = ()) -> None:
        self._rule_table = rule_table
        self._file = file
        self._ignore_rules = frozenset(ignore_rules)
        self.errors: list[ValidationIssue] = []
        self.warnings: list[ValidationIssue] = []

    def add(self, rule_id: RuleId, detail: str | None = None, line: int | None = None) -> None:
        if rule_id in self._ignore_rules:
            return

        issue = ValidationIssue(
            rule_id=rule_id,
            message=self._rule_table.render(rule_id, detail),
            severity=self._rule_table.severity(rule_id),
            file=self._file,
            line=line,
        )
        if issue.severity == "error":
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def extend(self, issues: Iterable[RawIssue]) -> None:
        for rule_id, detail in issues:
            self.add(rule_id, detail)

    def result(self) -> FileValidationResult:
        return FileValidationResult(file=self._file, errors=list(self.errors), warnings=list(self.warnings))
