"""Run the plan-qa CLI with ``python -m plan_qa``."""

from .adapters.inbound.cli.commands import app

if __name__ == "__main__":
    app()
