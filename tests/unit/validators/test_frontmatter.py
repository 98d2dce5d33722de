"""フロントマター分割・解析のユニットテスト。"""

from pathlib import Path

import pytest

from agentlint.models.errors import FrontmatterSyntaxError
from agentlint.models.validation import ParsedDocument, ParseFailure
from agentlint.validators.frontmatter import (
    MAX_FILE_SIZE_KB,
    decode_yaml,
    parse_agent_file,
    parse_agent_text,
    parse_document,
    split_frontmatter,
)


class TestSplitFrontmatter:
    def test_split_lf(self) -> None:
        header, body = split_frontmatter("---\nname: a\n---\nbody text\n")
        assert header == "name: a"
        assert body == "body text\n"

    def test_split_crlf(self) -> None:
        header, body = split_frontmatter("---\r\nname: a\r\n---\r\nbody\r\n")
        assert header == "name: a"
        assert body == "body\r\n"

    def test_closing_delimiter_at_end_of_text(self) -> None:
        header, body = split_frontmatter("---\nname: a\n---")
        assert header == "name: a"
        assert body == ""

    def test_missing_opening_delimiter(self) -> None:
        content = "# Title\n---\nname: a\n---\n"
        assert split_frontmatter(content) == (None, content)

    def test_missing_closing_delimiter(self) -> None:
        content = "---\nname: a\nbody without closing marker\n"
        assert split_frontmatter(content) == (None, content)

    def test_empty_header(self) -> None:
        header, body = split_frontmatter("---\n---\nbody")
        assert header == ""
        assert body == "body"

    def test_delimiter_must_be_whole_line(self) -> None:
        header, body = split_frontmatter("---\nname: a\n---extra\nmore\n---\nbody")
        assert header == "name: a\n---extra\nmore"
        assert body == "body"


class TestDecodeYaml:
    def test_decode_mapping(self) -> None:
        assert decode_yaml("name: a\ntools: [x]") == {"name": "a", "tools": ["x"]}

    def test_syntax_error_has_line(self) -> None:
        with pytest.raises(FrontmatterSyntaxError) as exc_info:
            decode_yaml("name: a\ntools: [x\n")
        assert exc_info.value.line is not None


class TestParseDocument:
    def test_header_absent(self) -> None:
        result = parse_document(None, "body")
        assert isinstance(result, ParseFailure)
        assert result.rule_id == "frontmatter-required"

    def test_syntax_error(self) -> None:
        result = parse_document("name: [unclosed", "body")
        assert isinstance(result, ParseFailure)
        assert result.rule_id == "frontmatter-valid"
        assert result.message.startswith("YAML syntax error:")
        # 開始区切り行の分だけずれた行番号
        assert result.line is not None and result.line >= 2

    @pytest.mark.parametrize("header", ["just a string", "- a\n- b", "42", ""])
    def test_non_mapping(self, header: str) -> None:
        result = parse_document(header, "body")
        assert isinstance(result, ParseFailure)
        assert result.rule_id == "frontmatter-valid"
        assert "mapping" in result.message

    def test_success_keeps_body(self) -> None:
        result = parse_document("name: a", "  body\n\n")
        assert isinstance(result, ParsedDocument)
        assert result.frontmatter == {"name": "a"}
        assert result.body == "  body\n\n"

    def test_custom_decoder(self) -> None:
        def decoder(text: str) -> object:
            raise FrontmatterSyntaxError("boom")

        result = parse_document("name: a", "", decode=decoder)
        assert isinstance(result, ParseFailure)
        assert result.rule_id == "frontmatter-valid"
        assert result.line is None


class TestParseAgentFile:
    def test_parse_text(self) -> None:
        result = parse_agent_text("---\ndescription: x\n---\nbody")
        assert isinstance(result, ParsedDocument)
        assert result.frontmatter["description"] == "x"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = parse_agent_file(tmp_path / "missing.agent.md")
        assert isinstance(result, ParseFailure)
        assert result.rule_id is None
        assert result.message.startswith("Failed to read file")

    def test_file_too_large(self, tmp_path: Path) -> None:
        file_path = tmp_path / "big.agent.md"
        file_path.write_text("---\nname: a\n---\n" + "x" * (MAX_FILE_SIZE_KB * 1024 + 1), encoding="utf-8")
        result = parse_agent_file(file_path)
        assert isinstance(result, ParseFailure)
        assert result.rule_id is None
        assert "File too large" in result.message

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        file_path = tmp_path / "binary.agent.md"
        file_path.write_bytes(b"---\nname: \xff\xfe\n---\n")
        result = parse_agent_file(file_path)
        assert isinstance(result, ParseFailure)
        assert result.rule_id is None
