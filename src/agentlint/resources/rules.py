"""ルールテーブルのMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from agentlint.validators.rules import RuleTable


def register_rule_resources(mcp: FastMCP, rule_table: RuleTable) -> None:
    """ルール関連のMCPリソースを登録する。"""

    @mcp.resource("agentlint://rules")
    async def validation_rules() -> str:
        """検証ルールの一覧を取得する。

        各ルールのID、重大度(error/warning)、メッセージテンプレートを返します。
        """
        rules = {"rules": [rule.model_dump() for rule in rule_table]}
        return yaml.dump(rules, allow_unicode=True, default_flow_style=False, sort_keys=False)
