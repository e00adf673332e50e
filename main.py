from __future__ import annotations

from gui import launch_app
from runtime_env import configure_runtime_env


def main() -> None:
    env_report = configure_runtime_env()
    launch_app(env_report=env_report)


if __name__ == "__main__":
    main()
