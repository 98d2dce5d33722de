"""検証対象となるエージェント定義ファイルの探索。"""

from pathlib import Path

from agentlint.models.errors import AgentPathError

AGENT_SUFFIX = ".agent.md"
LEGACY_CHATMODE_SUFFIX = ".chatmode.md"


def is_legacy_chatmode(file_path: Path) -> bool:
    return file_path.name.endswith(LEGACY_CHATMODE_SUFFIX)


def _list_matching(directory: Path, suffix: str) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix))


def resolve_agent_paths(path: Path) -> list[Path]:
    """パスからエージェント定義ファイルの一覧を解決する。

    ファイルが指定された場合はその拡張子を検証する。ディレクトリが指定された場合は
    .github/agents、ディレクトリ直下、旧形式の .github/chatmodes の順に探索する。

    Raises:
        AgentPathError: パスが存在しない、拡張子が不正、またはファイルが見つからない場合。
    """
    resolved = path.resolve()
    if not resolved.exists():
        raise AgentPathError(f"Path not found: {path}", path=str(path))

    if resolved.is_file():
        if not resolved.name.endswith((AGENT_SUFFIX, LEGACY_CHATMODE_SUFFIX)):
            raise AgentPathError(
                f"File must have .agent.md extension: {path}",
                path=str(path),
                rule_id="file-extension",
            )
        return [resolved]

    if resolved.is_dir():
        candidates = [
            *_list_matching(resolved / ".github" / "agents", AGENT_SUFFIX),
            *_list_matching(resolved, AGENT_SUFFIX),
            *_list_matching(resolved / ".github" / "chatmodes", LEGACY_CHATMODE_SUFFIX),
        ]
        files = list(dict.fromkeys(candidates))
        if not files:
            raise AgentPathError(f"No .agent.md files found in: {path}", path=str(path))
        return files

    raise AgentPathError(f"Invalid path type: {path}", path=str(path))
