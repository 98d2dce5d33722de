"""検証用のMCPツール定義。"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from agentlint.config import ValidatorConfig
from agentlint.models.errors import AgentLintError
from agentlint.models.validation import ValidateOptions
from agentlint.services.validation import ValidationService


def register_validation_tools(mcp: FastMCP, validation_service: ValidationService, config: ValidatorConfig) -> None:
    """検証関連のMCPツールを登録する。"""

    def _options(ignore_rules: list[str] | None, validate_references: bool | None) -> ValidateOptions:
        return ValidateOptions(
            ignore_rules=frozenset(ignore_rules if ignore_rules is not None else config.ignore_rule_ids()),
            validate_references=(
                validate_references if validate_references is not None else config.validate_references
            ),
        )

    @mcp.tool()
    async def validate_agent_path(
        path: str,
        ignore_rules: list[str] | None = None,
        validate_references: bool | None = None,
        fail_on_warning: bool | None = None,
    ) -> dict[str, Any]:
        """エージェント定義ファイル、またはディレクトリ内の全エージェント定義を検証する。

        ディレクトリの場合は .github/agents、ディレクトリ直下、.github/chatmodes を探索します。

        Args:
            path: .agent.md ファイルまたはディレクトリのパス。
            ignore_rules: 無視するルールIDのリスト（任意）。
            validate_references: 本文中の相対リンクの存在確認を行うか（任意）。
            fail_on_warning: 警告があれば不合格とするか（任意）。
        """
        try:
            run = validation_service.validate_path(
                Path(path),
                _options(ignore_rules, validate_references),
                fail_on_warning=fail_on_warning if fail_on_warning is not None else config.fail_on_warning,
            )
            return run.model_dump(mode="json")
        except AgentLintError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def validate_agent_content(
        content: str,
        file_name: str = "inline.agent.md",
        ignore_rules: list[str] | None = None,
    ) -> dict[str, Any]:
        """エージェント定義の内容を文字列のまま検証する。

        ファイルを保存する前の下書きの確認に使います。相対リンクの存在確認は行いません。

        Args:
            content: フロントマターと本文を含むエージェント定義の全文。
            file_name: 検出結果に記録するファイル名（任意）。
            ignore_rules: 無視するルールIDのリスト（任意）。
        """
        result = validation_service.validate_text(
            content,
            file_name,
            Path.cwd(),
            _options(ignore_rules, False),
        )
        return result.model_dump(mode="json")
