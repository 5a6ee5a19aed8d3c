"""user-rights: manage user right assignments on a Windows host."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

import typer

from user_rights.configs.logging_config import get_logger, setup_logging
from user_rights.configs.settings import get_settings
from user_rights.domain.entities.change import PrincipalChangeRequest, PrivilegeChangeRequest
from user_rights.errors import OptionsValidationError, UserRightsError
from user_rights.policy.store import PolicyStore, create_policy_store
from user_rights.removal.strategy_factory import StrategyFactory
from user_rights.services.listing_service import ListingService
from user_rights.services.reconciliation_service import ReconciliationService
from user_rights.services.validation_service import (
    validate_principal_change,
    validate_privilege_change,
)
from user_rights.utils.serialization import to_csv, to_json

__version__ = "0.1.0"
PROGRAM = "user-rights"

log = get_logger(__name__)

EXAMPLES = {
    "list": [
        "list",
        "list --json",
        "list --path x:\\path\\file.csv",
    ],
    "principal": [
        "principal DOMAIN\\UserOrGroup --grant SeDenyServiceLogonRight",
        "principal DOMAIN\\UserOrGroup --revoke SeDenyServiceLogonRight",
        "principal DOMAIN\\UserOrGroup --grant SeServiceLogonRight --revoke SeDenyServiceLogonRight",
        "principal DOMAIN\\UserOrGroup --grant SeServiceLogonRight --grant SeInteractiveLogonRight --revoke-others",
    ],
    "privilege": [
        "privilege SeServiceLogonRight --grant DOMAIN\\UserOrGroup --revoke DOMAIN\\Group",
        "privilege SeServiceLogonRight --revoke DOMAIN\\UserOrGroup",
        'privilege SeServiceLogonRight --grant DOMAIN\\UserOrGroup --revoke-pattern "^S-1-5-21-"',
        'privilege SeServiceLogonRight --revoke-pattern "^S-1-5-21-"',
        "privilege SeServiceLogonRight --revoke-all",
    ],
}


def _epilog(mode: str) -> str:
    lines = [f"{PROGRAM} {example}" for example in EXAMPLES[mode]]
    return "Examples:\n\n" + "\n\n".join(lines)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGRAM} {__version__}")
        raise typer.Exit()


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Windows User Rights Assignment Utility.",
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    pass


# ----------------------------
# Execution
# ----------------------------


def _system_name_violations(system_name: Optional[str]) -> List[str]:
    if system_name is not None and not system_name.strip():
        return ["System name cannot be empty or whitespace."]
    return []


def _execute(
    mode: str,
    system_name: Optional[str],
    violations: Sequence[str],
    work: Callable[[PolicyStore], None],
) -> None:
    settings = get_settings()
    setup_logging(settings.log_level if mode == "list" else settings.modify_log_level)
    log.info("%s v%s executing in %s mode", PROGRAM, __version__, mode)

    store: Optional[PolicyStore] = None
    try:
        if violations:
            raise OptionsValidationError(violations)

        store = create_policy_store()
        store.connect(system_name or settings.default_system_name)
        work(store)
    except OptionsValidationError as exc:
        for violation in exc.violations:
            log.error("syntax.error mode=%s violation=%s", mode, violation)
            typer.echo(violation, err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    except UserRightsError as exc:
        log.error("execution.failed mode=%s error=%s", mode, exc.message)
        typer.echo(f"Execution failed: {exc.message}", err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    except Exception as exc:
        log.exception("execution.failed mode=%s", mode)
        typer.echo(f"Execution failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    finally:
        if store is not None:
            store.close()


def _reconciliation_service() -> ReconciliationService:
    return ReconciliationService(StrategyFactory(get_settings().pattern_timeout_seconds))


# ----------------------------
# Commands
# ----------------------------


@app.command("list", help="Runs the utility in list mode.", epilog=_epilog("list"))
def list_(
    json: bool = typer.Option(False, "--json", "-j", help="Formats output in JSON instead of CSV."),
    path: Optional[str] = typer.Option(
        None,
        "--path",
        "-f",
        help="The path to write the output to. If not specified, output is written to STDOUT.",
    ),
    system_name: Optional[str] = typer.Option(
        None, "--system-name", "-s", help="The name of the remote system to execute on (default localhost)."
    ),
) -> None:
    violations = _system_name_violations(system_name)
    if path is not None and not path.strip():
        violations.append("Path cannot be empty or whitespace.")

    def work(store: PolicyStore) -> None:
        entries = ListingService().list_assignments(store)
        serialized = to_json(entries) if json else to_csv(entries)

        if path is None:
            typer.echo(serialized, nl=False)
            return

        try:
            Path(path).write_text(serialized, encoding="utf-8")
        except OSError as exc:
            raise UserRightsError(f"Failed to write {path}: {exc.strerror}") from exc

    _execute("list", system_name, violations, work)


@app.command("principal", help="Runs the utility in principal mode.", epilog=_epilog("principal"))
def principal(
    principal: str = typer.Argument(..., help="The principal to modify."),
    grants: Optional[List[str]] = typer.Option(
        None, "--grant", "-g", help="The privilege to grant to the principal."
    ),
    revocations: Optional[List[str]] = typer.Option(
        None, "--revoke", "-r", help="The privilege to revoke from the principal."
    ),
    revoke_all: bool = typer.Option(
        False, "--revoke-all", "-a", help="Revokes all privileges from the principal."
    ),
    revoke_others: bool = typer.Option(
        False,
        "--revoke-others",
        "-o",
        help="Revokes all privileges from the principal excluding those being granted.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Enables dry-run mode."),
    system_name: Optional[str] = typer.Option(
        None, "--system-name", "-s", help="The name of the remote system to execute on (default localhost)."
    ),
) -> None:
    request = PrincipalChangeRequest(
        principal=principal,
        grants=tuple(grants or ()),
        revocations=tuple(revocations or ()),
        revoke_all=revoke_all,
        revoke_others=revoke_others,
        dry_run=dry_run,
    )
    violations = validate_principal_change(request) + _system_name_violations(system_name)

    def work(store: PolicyStore) -> None:
        _reconciliation_service().reconcile_principal(store, request)

    _execute("principal", system_name, violations, work)


@app.command("privilege", help="Runs the utility in privilege mode.", epilog=_epilog("privilege"))
def privilege(
    privilege: str = typer.Argument(..., help="The privilege to modify."),
    grants: Optional[List[str]] = typer.Option(
        None, "--grant", "-g", help="The principal to grant the privilege to."
    ),
    revocations: Optional[List[str]] = typer.Option(
        None, "--revoke", "-r", help="The principal to revoke the privilege from."
    ),
    revoke_all: bool = typer.Option(
        False, "--revoke-all", "-a", help="Revokes all principals from the privilege."
    ),
    revoke_others: bool = typer.Option(
        False,
        "--revoke-others",
        "-o",
        help="Revokes all principals from the privilege excluding those being granted.",
    ),
    revoke_pattern: Optional[str] = typer.Option(
        None,
        "--revoke-pattern",
        "-t",
        help="Revokes all principals whose SID matches the regular expression excluding those being granted.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Enables dry-run mode."),
    system_name: Optional[str] = typer.Option(
        None, "--system-name", "-s", help="The name of the remote system to execute on (default localhost)."
    ),
) -> None:
    request = PrivilegeChangeRequest(
        privilege=privilege,
        grants=tuple(grants or ()),
        revocations=tuple(revocations or ()),
        revoke_all=revoke_all,
        revoke_others=revoke_others,
        revoke_pattern=revoke_pattern,
        dry_run=dry_run,
    )
    violations = validate_privilege_change(request) + _system_name_violations(system_name)

    def work(store: PolicyStore) -> None:
        _reconciliation_service().reconcile_privilege(store, request)

    _execute("privilege", system_name, violations, work)


if __name__ == "__main__":
    app()
