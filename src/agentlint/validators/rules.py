"""ルールテーブルの読み込みとメッセージ生成。"""

import re
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from agentlint.models.errors import RuleTableError
from agentlint.models.validation import KNOWN_FIELDS, RULE_IDS, RuleDefinition, Severity

# 詳細値で置換されるトークン
_DETAIL_TOKENS: frozenset[str] = frozenset({"detail", "length", "lines", "value", "field", "path", "index"})
_TOKEN_PATTERN = re.compile(r"\{(\w+)\}")


class RuleTable:
    """ルールIDから重大度とメッセージテンプレートを引く静的テーブル。"""

    def __init__(self, rules: list[RuleDefinition]) -> None:
        self._rules: dict[str, RuleDefinition] = {rule.id: rule for rule in rules}

    @classmethod
    def from_file(cls, rules_file: Path) -> "RuleTable":
        """ルール定義YAMLを読み込み、全ルールIDが一度ずつ定義されていることを検証する。

        Raises:
            RuleTableError: ファイルが読めない、またはルールIDの過不足・重複がある場合。
        """
        try:
            with open(rules_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise RuleTableError(str(rules_file), str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
            raise RuleTableError(str(rules_file), "top-level 'rules' list is missing")

        try:
            rules = [RuleDefinition.model_validate(rule_data) for rule_data in data["rules"]]
        except ValidationError as e:
            raise RuleTableError(str(rules_file), str(e)) from e

        seen: set[str] = set()
        for rule in rules:
            if rule.id in seen:
                raise RuleTableError(str(rules_file), f"duplicate rule id '{rule.id}'")
            seen.add(rule.id)

        missing = [rule_id for rule_id in RULE_IDS if rule_id not in seen]
        if missing:
            raise RuleTableError(str(rules_file), f"missing rule ids: {', '.join(missing)}")

        return cls(rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self._rules[rule_id] for rule_id in RULE_IDS)

    def get(self, rule_id: str) -> RuleDefinition:
        return self._rules[rule_id]

    def severity(self, rule_id: str) -> Severity:
        return self._rules[rule_id].severity

    def render(self, rule_id: str, detail: str | None) -> str:
        """メッセージテンプレートのトークンを詳細値で置換する。

        詳細値がない場合はテンプレートをそのまま返す。テンプレートに含まれない
        トークンは置換されず、未知のトークンもそのまま残す。
        """
        template = self._rules[rule_id].message
        if detail is None:
            return template

        def _substitute(match: re.Match[str]) -> str:
            token = match.group(1)
            if token in _DETAIL_TOKENS:
                return detail
            if token == "knownFields":
                return ", ".join(KNOWN_FIELDS)
            return match.group(0)

        return _TOKEN_PATTERN.sub(_substitute, template)


@lru_cache(maxsize=None)
def load_rule_table(rules_file: Path) -> RuleTable:
    """ルールテーブルをプロセス内で一度だけ読み込む。"""
    return RuleTable.from_file(rules_file)
