"""バリデーション関連のデータモデル。"""

from pathlib import Path
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, computed_field

Severity = Literal["error", "warning"]

RuleId = Literal[
    "frontmatter-required",
    "frontmatter-valid",
    "file-extension",
    "description-format",
    "description-quality",
    "name-format",
    "argument-hint-format",
    "tools-format",
    "agents-format",
    "model-format",
    "user-invokable-format",
    "disable-model-invocation-format",
    "infer-deprecated",
    "target-valid",
    "mcp-servers-format",
    "handoffs-format",
    "handoff-label-required",
    "handoff-agent-required",
    "handoff-send-format",
    "handoff-model-format",
    "unknown-field",
    "body-empty",
    "body-too-long",
    "reference-not-found",
]

RULE_IDS: tuple[str, ...] = get_args(RuleId)

# フロントマターで認識されるフィールド (メッセージ中の一覧もこの順序)
KNOWN_FIELDS: tuple[str, ...] = (
    "description",
    "name",
    "argument-hint",
    "tools",
    "agents",
    "model",
    "user-invokable",
    "disable-model-invocation",
    "infer",
    "target",
    "mcp-servers",
    "handoffs",
)

VALID_TARGETS: frozenset[str] = frozenset({"vscode", "github-copilot"})


class RuleDefinition(BaseModel):
    """バリデーションルール定義（YAMLから読み込み）。"""

    model_config = ConfigDict(frozen=True)

    id: RuleId
    severity: Severity
    message: str


class ValidationIssue(BaseModel):
    """1件の検出結果。生成後は変更されない。"""

    model_config = ConfigDict(frozen=True)

    rule_id: RuleId | None
    message: str
    severity: Severity
    file: str
    line: int | None = None


class ParsedDocument(BaseModel):
    """フロントマターの解析結果と本文。"""

    model_config = ConfigDict(frozen=True)

    frontmatter: dict[Any, Any]
    body: str


class ParseFailure(BaseModel):
    """ファイル単位で検証を打ち切る構造的な失敗。"""

    model_config = ConfigDict(frozen=True)

    message: str
    rule_id: RuleId | None = None
    line: int | None = None


class ValidateOptions(BaseModel):
    """1回の検証実行に共通するオプション。"""

    model_config = ConfigDict(frozen=True)

    ignore_rules: frozenset[str] = frozenset()
    validate_references: bool = False


class FileValidationResult(BaseModel):
    """1ファイル分の検証結果。"""

    file: str
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def file_name(self) -> str:
        return Path(self.file).name


class RunResult(BaseModel):
    """複数ファイルの検証結果の集約。"""

    file_results: list[FileValidationResult] = Field(default_factory=list)
    fail_on_warning: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def files_validated(self) -> int:
        return len(self.file_results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for result in self.file_results for issue in result.errors]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for result in self.file_results for issue in result.warnings]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        if self.errors:
            return False
        return not (self.fail_on_warning and self.warnings)
