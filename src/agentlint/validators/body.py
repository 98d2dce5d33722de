"""エージェント本文のバリデーション。"""

import re
from pathlib import Path

from agentlint.validators.collector import RawIssue

BODY_MAX_LINES = 1000

_LINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")
# http:, https:, mailto: などスキーム付きのリンク
_URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


def check_body(body: str) -> list[RawIssue]:
    """本文が空でないこと、行数が上限以下であることを検証する。

    行数はsplitlines()で数える。末尾の改行は最終行の終端として扱い、行を増やさない。
    """
    if not body.strip():
        return [("body-empty", None)]

    line_count = len(body.splitlines())
    if line_count > BODY_MAX_LINES:
        return [("body-too-long", str(line_count))]
    return []


def _target_exists(path: Path) -> bool:
    # 長すぎる名前や権限エラーなどOSErrorになる場合は存在しないとみなす
    try:
        return path.exists()
    except (OSError, ValueError):
        return False


def iter_link_targets(body: str) -> list[str]:
    """本文中のMarkdownリンクのうち、ファイルシステム上で解決すべきリンク先を返す。"""
    targets: list[str] = []
    for match in _LINK_PATTERN.finditer(body):
        target = match.group(2).strip()
        if not target or target.startswith("#") or _URL_SCHEME_PATTERN.match(target):
            continue
        targets.append(target)
    return targets


def check_references(body: str, base_dir: Path) -> list[RawIssue]:
    """相対リンクをファイルのディレクトリ基準で解決し、存在しないものを報告する。"""
    issues: list[RawIssue] = []
    for target in iter_link_targets(body):
        # ファイル内アンカー部分は存在確認の対象外
        path_part = target.split("#", 1)[0]
        if not _target_exists(base_dir / path_part):
            issues.append(("reference-not-found", target))
    return issues
