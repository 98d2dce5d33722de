"""agentlintの設定管理。"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

_PACKAGE_ROOT = Path(__file__).parent


class ValidatorConfig(BaseSettings):
    """バリデータ設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "AGENTLINT_"}

    path: Path = Path(".")
    fail_on_warning: bool = False
    # カンマ区切りのルールID (例: "body-empty,unknown-field")
    ignore_rules: str = ""
    validate_references: bool = False
    rules_file: Path = _PACKAGE_ROOT / "rules" / "agent-rules.yaml"

    log_level: str = "INFO"
    log_json: bool = False

    # GitHub Actions のステップ出力ファイル (プレフィックスなし)
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT", "AGENTLINT_GITHUB_OUTPUT"),
    )

    def ignore_rule_ids(self) -> list[str]:
        """ignore_rulesを空要素を除いたルールIDのリストに分解する。"""
        return [rule.strip() for rule in self.ignore_rules.split(",") if rule.strip()]
