"""本文バリデータのユニットテスト。"""

from pathlib import Path

import pytest

from agentlint.validators.body import BODY_MAX_LINES, check_body, check_references, iter_link_targets


class TestCheckBody:
    @pytest.mark.parametrize("body", ["", "   ", "\n\n\t\n"])
    def test_empty_body(self, body: str) -> None:
        assert check_body(body) == [("body-empty", None)]

    def test_body_within_limit(self) -> None:
        assert check_body("line\n" * BODY_MAX_LINES) == []

    def test_body_too_long(self) -> None:
        assert check_body("line\n" * (BODY_MAX_LINES + 1)) == [("body-too-long", str(BODY_MAX_LINES + 1))]

    def test_trailing_newline_does_not_add_a_line(self) -> None:
        body = "\n".join(["line"] * BODY_MAX_LINES) + "\n"
        assert check_body(body) == []


class TestReferences:
    def test_link_targets_skip_urls_and_anchors(self) -> None:
        body = (
            "[docs](https://example.com) [plain](http://example.com) [mail](mailto:a@example.com) "
            "[anchor](#usage) [guide](./guide.md) [nested](docs/setup.md#install)"
        )
        assert iter_link_targets(body) == ["./guide.md", "docs/setup.md#install"]

    def test_existing_and_missing_targets(self, tmp_path: Path) -> None:
        (tmp_path / "guide.md").write_text("# guide", encoding="utf-8")
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "setup.md").write_text("# setup", encoding="utf-8")
        body = "See [guide](guide.md), [setup](docs/setup.md#install) and [missing](./missing.md)."
        assert check_references(body, tmp_path) == [("reference-not-found", "./missing.md")]

    def test_parent_relative_target(self, tmp_path: Path) -> None:
        agents_dir = tmp_path / ".github" / "agents"
        agents_dir.mkdir(parents=True)
        (tmp_path / "README.md").write_text("readme", encoding="utf-8")
        assert check_references("[readme](../../README.md)", agents_dir) == []

    def test_no_links(self, tmp_path: Path) -> None:
        assert check_references("plain text [not a link]", tmp_path) == []

    def test_unresolvable_target_counts_as_missing(self, tmp_path: Path) -> None:
        # OSのファイル名長上限を超えるリンク先
        target = "x" * 300 + ".md"
        assert check_references(f"See [g]({target}).", tmp_path) == [("reference-not-found", target)]
