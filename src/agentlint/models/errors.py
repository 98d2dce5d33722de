"""agentlintのカスタム例外クラス。"""


class AgentLintError(Exception):
    """agentlintの基底例外クラス。"""


class RuleTableError(AgentLintError):
    """ルール定義ファイルが読み込めない、または不整合な場合の例外。"""

    def __init__(self, rules_file: str, reason: str) -> None:
        super().__init__(f"Invalid rule table {rules_file}: {reason}")
        self.rules_file = rules_file
        self.reason = reason


class FrontmatterSyntaxError(AgentLintError):
    """フロントマターのYAML構文エラー。"""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class AgentPathError(AgentLintError):
    """検証対象パスからエージェントファイルを解決できない場合の例外。"""

    def __init__(self, message: str, path: str, rule_id: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.rule_id = rule_id
