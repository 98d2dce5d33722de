"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from agentlint.config import ValidatorConfig
from agentlint.services.validation import ValidationService
from agentlint.validators.rules import RuleTable, load_rule_table

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """エージェント定義のフィクスチャディレクトリ。"""
    return FIXTURES_DIR


@pytest.fixture
def validator_config() -> ValidatorConfig:
    """テスト用ValidatorConfig。"""
    return ValidatorConfig()


@pytest.fixture
def rule_table(validator_config: ValidatorConfig) -> RuleTable:
    """同梱のルールテーブル。"""
    return load_rule_table(validator_config.rules_file)


@pytest.fixture
def validation_service(rule_table: RuleTable) -> ValidationService:
    """テスト用ValidationService。"""
    return ValidationService(rule_table)


@pytest.fixture
def write_agent(tmp_path: Path):  # type: ignore[no-untyped-def]
    """一時ディレクトリにエージェント定義ファイルを書き出すヘルパー。"""

    def _write(content: str, name: str = "test.agent.md") -> Path:
        file_path = tmp_path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write
