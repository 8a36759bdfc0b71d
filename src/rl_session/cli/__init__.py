from rl_session.cli.app import app

__all__ = ["app"]
