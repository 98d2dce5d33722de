"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP

from agentlint.config import ValidatorConfig
from agentlint.resources.rules import register_rule_resources
from agentlint.services.validation import ValidationService
from agentlint.tools.validation import register_validation_tools
from agentlint.validators.rules import load_rule_table


def create_server(config: ValidatorConfig | None = None) -> FastMCP:
    """agentlint MCPサーバーを作成し、ツール・リソースを登録する。

    Args:
        config: バリデータ設定。Noneの場合はデフォルト設定を使用。

    Returns:
        設定済みのFastMCPインスタンス。
    """
    if config is None:
        config = ValidatorConfig()

    mcp = FastMCP("agentlint")

    rule_table = load_rule_table(config.rules_file)
    validation_service = ValidationService(rule_table)

    register_validation_tools(mcp, validation_service, config)
    register_rule_resources(mcp, rule_table)

    return mcp
