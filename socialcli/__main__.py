import os

from dotenv import load_dotenv

from socialcli.cli.commands import app

# Values from ~/.socialcli/.env fill in; variables already set take precedence.
load_dotenv(os.path.join(os.environ.get("SOCIALCLI_HOME") or os.path.expanduser("~/.socialcli"), ".env"), override=False)

if __name__ == "__main__":
    app()
