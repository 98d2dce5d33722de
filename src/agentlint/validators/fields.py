"""フロントマターのフィールド単位のバリデーション。

各チェッカーはフィールド値だけを受け取り、(ルールID, 詳細値) のリストを返す。
例外は送出せず、他のフィールドの結果にも影響しない。
"""

from collections.abc import Callable, Mapping
from typing import Any

from agentlint.models.validation import KNOWN_FIELDS, VALID_TARGETS, ParsedDocument, RuleId
from agentlint.validators.collector import RawIssue

DESCRIPTION_MIN_QUALITY = 50

AGENTS_WILDCARD = "*"

FieldChecker = Callable[[Any], list[RawIssue]]


def _non_string_items(items: list[Any], rule_id: RuleId) -> list[RawIssue]:
    return [(rule_id, f"Item at index {i} is not a string") for i, item in enumerate(items) if not isinstance(item, str)]


def check_description(value: Any) -> list[RawIssue]:
    if not isinstance(value, str) or not value.strip():
        return [("description-format", None)]
    if len(value) < DESCRIPTION_MIN_QUALITY:
        return [("description-quality", str(len(value)))]
    return []


def _string_checker(rule_id: RuleId) -> FieldChecker:
    def check(value: Any) -> list[RawIssue]:
        if value is None or isinstance(value, str):
            return []
        return [(rule_id, None)]

    return check


def _boolean_checker(rule_id: RuleId) -> FieldChecker:
    def check(value: Any) -> list[RawIssue]:
        if value is None or isinstance(value, bool):
            return []
        return [(rule_id, None)]

    return check


def check_tools(value: Any) -> list[RawIssue]:
    if value is None:
        return []
    if not isinstance(value, list):
        return [("tools-format", "Expected an array")]
    return _non_string_items(value, "tools-format")


def check_agents(value: Any) -> list[RawIssue]:
    if value is None or value == AGENTS_WILDCARD:
        return []
    if not isinstance(value, list):
        return [("agents-format", "Expected an array or '*'")]
    return _non_string_items(value, "agents-format")


def check_model(value: Any) -> list[RawIssue]:
    """モデル指定は文字列、または優先順位付きの文字列配列。"""
    if value is None or isinstance(value, str):
        return []
    if isinstance(value, list):
        return _non_string_items(value, "model-format")
    return [("model-format", "Expected a string or array of strings")]


def check_target(value: Any) -> list[RawIssue]:
    if value is None:
        return []
    if not isinstance(value, str) or value not in VALID_TARGETS:
        return [("target-valid", str(value))]
    return []


def check_mcp_servers(value: Any) -> list[RawIssue]:
    # github-copilot以外のtargetとの組み合わせは検査しない
    if value is None or isinstance(value, list):
        return []
    return [("mcp-servers-format", None)]


def check_handoff(handoff: Any, index: int) -> list[RawIssue]:
    """handoffs配列の1要素を検証する。

    オブジェクトでない要素は中身を検査せず1件だけ報告する。label/agentは必須、
    send/modelはキーが存在する場合のみ型を検査する。
    """
    if not isinstance(handoff, Mapping):
        return [("handoffs-format", f"Item at index {index} is not an object")]

    issues: list[RawIssue] = []
    label = handoff.get("label")
    if not isinstance(label, str) or not label:
        issues.append(("handoff-label-required", str(index)))

    agent = handoff.get("agent")
    if not isinstance(agent, str) or not agent:
        issues.append(("handoff-agent-required", str(index)))

    if "send" in handoff and not isinstance(handoff["send"], bool):
        issues.append(("handoff-send-format", str(index)))

    if "model" in handoff and not isinstance(handoff["model"], str):
        issues.append(("handoff-model-format", str(index)))

    return issues


def check_handoffs(value: Any) -> list[RawIssue]:
    if value is None:
        return []
    if not isinstance(value, list):
        return [("handoffs-format", "Expected an array")]

    issues: list[RawIssue] = []
    for index, handoff in enumerate(value):
        issues.extend(check_handoff(handoff, index))
    return issues


# フィールド名 → チェッカー。inferは値ではなく存在で判定するため含めない
FIELD_VALIDATORS: tuple[tuple[str, FieldChecker], ...] = (
    ("description", check_description),
    ("name", _string_checker("name-format")),
    ("argument-hint", _string_checker("argument-hint-format")),
    ("tools", check_tools),
    ("agents", check_agents),
    ("model", check_model),
    ("user-invokable", _boolean_checker("user-invokable-format")),
    ("disable-model-invocation", _boolean_checker("disable-model-invocation-format")),
    ("target", check_target),
    ("mcp-servers", check_mcp_servers),
    ("handoffs", check_handoffs),
)


def check_infer(document: ParsedDocument) -> list[RawIssue]:
    if "infer" in document.frontmatter:
        return [("infer-deprecated", None)]
    return []


def check_unknown_fields(document: ParsedDocument) -> list[RawIssue]:
    return [("unknown-field", str(key)) for key in document.frontmatter if str(key) not in KNOWN_FIELDS]


def validate_fields(document: ParsedDocument) -> list[RawIssue]:
    """全フィールドのチェッカーを実行し、検出結果をまとめて返す。"""
    issues: list[RawIssue] = []
    for field_name, checker in FIELD_VALIDATORS:
        issues.extend(checker(document.frontmatter.get(field_name)))
    issues.extend(check_infer(document))
    issues.extend(check_unknown_fields(document))
    return issues
