"""フロントマターの分割とYAML解析。"""

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from agentlint.models.errors import FrontmatterSyntaxError
from agentlint.models.validation import ParsedDocument, ParseFailure

MAX_FILE_SIZE_KB = 512

# 先頭の --- 行から次の --- 行までをヘッダーとする (LF/CRLF両対応)
_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)(.*)\Z",
    re.DOTALL,
)

Decoder = Callable[[str], Any]


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """ファイル内容をフロントマターと本文に分割する。

    Returns:
        (フロントマター, 本文)。区切り行の組が見つからない場合は
        フロントマターをNoneとし、内容全体を本文として返す。
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if match is None:
        return None, content
    return match.group(1) or "", match.group(2)


def decode_yaml(text: str) -> Any:
    """YAMLテキストを汎用的なPythonオブジェクトに変換する。

    Raises:
        FrontmatterSyntaxError: YAML構文エラーの場合。lineはヘッダー内の1始まりの行番号。
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise FrontmatterSyntaxError(str(e), line=line) from e


def parse_document(
    frontmatter: str | None,
    body: str,
    decode: Decoder = decode_yaml,
) -> ParsedDocument | ParseFailure:
    """フロントマターをデコードし、失敗を種類ごとに分類する。"""
    if frontmatter is None:
        return ParseFailure(
            message="Agent file must contain YAML frontmatter (content between --- markers)",
            rule_id="frontmatter-required",
        )

    try:
        data = decode(frontmatter)
    except FrontmatterSyntaxError as e:
        # 1行目は開始区切り行
        line = e.line + 1 if e.line is not None else None
        return ParseFailure(message=f"YAML syntax error: {e}", rule_id="frontmatter-valid", line=line)

    if not isinstance(data, dict):
        return ParseFailure(message="Frontmatter must be a YAML mapping of fields", rule_id="frontmatter-valid")

    return ParsedDocument(frontmatter=data, body=body)


def parse_agent_text(content: str, decode: Decoder = decode_yaml) -> ParsedDocument | ParseFailure:
    """エージェント定義のテキストを解析する。"""
    frontmatter, body = split_frontmatter(content)
    return parse_document(frontmatter, body, decode=decode)


def parse_agent_file(file_path: Path, decode: Decoder = decode_yaml) -> ParsedDocument | ParseFailure:
    """エージェント定義ファイルを読み込んで解析する。

    サイズ上限超過と読み込み失敗はルールIDを持たない構造的な失敗として返す。
    """
    try:
        size = file_path.stat().st_size
        if size > MAX_FILE_SIZE_KB * 1024:
            return ParseFailure(
                message=f"File too large ({round(size / 1024)}KB). Maximum: {MAX_FILE_SIZE_KB}KB",
            )
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return ParseFailure(message=f"Failed to read file: {e}")

    return parse_agent_text(content, decode=decode)
