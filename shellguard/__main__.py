import os

from dotenv import load_dotenv

from shellguard.cli.commands import app

ENV_FILE = "~/.shellguard/.env"


def main() -> None:
    """Console entry point: seed the environment from the .env file, then run the CLI."""
    # variables already set in the environment win over the file
    load_dotenv(os.path.expanduser(ENV_FILE), override=False)
    app()


if __name__ == "__main__":
    main()
