"""Module entrypoint so `python -m user_rights` works."""

from __future__ import annotations

from user_rights.cli import app


def main() -> None:
    app(prog_name="user-rights")


if __name__ == "__main__":
    main()
