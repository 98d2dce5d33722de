"""agentlintのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    from agentlint.cli import app

    app()
