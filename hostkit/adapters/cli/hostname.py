"""
Hostname CLI command
"""
from typing import Optional

import typer

from ...core.exceptions import HostkitError, PrecheckError, ValidationError
from ...core.logging import get_logger
from ...domain.hostname import HostnameRequest, HostnameService, HostnameTarget
from ...domain.hostname.models import ReconcileAction
from .reporter import RichReporter
from .runtime import create_context, settings_for

logger = get_logger(__name__)
reporter = RichReporter()

ACTION_LABELS = {
    ReconcileAction.REPLACED: "replaced 127.0.1.1 line",
    ReconcileAction.TOKEN_REPLACED: "replaced hostname token",
    ReconcileAction.INSERTED: "inserted",
    ReconcileAction.APPENDED: "appended",
}


def register_hostname_command(app: typer.Typer) -> None:
    """Register hostname command on the main app"""
    app.command(name="hostname")(hostname_run)


def hostname_run(
    ctx: typer.Context,
    new_hostname: Optional[str] = typer.Argument(
        None, metavar="NEW_HOSTNAME", help="New hostname; only the first label is used as hostname"
    ),
    fqdn: Optional[str] = typer.Option(
        None, "--fqdn", help="Write the FQDN into /etc/hosts (IP FQDN HOST)"
    ),
    no_hosts: bool = typer.Option(False, "--no-hosts", help="Do not modify /etc/hosts"),
    cloud_init: bool = typer.Option(
        False, "--cloud-init", help="If cloud-init is present: preserve_hostname + patch hosts templates"
    ),
    force_hosts: bool = typer.Option(
        False, "--force-hosts", help="Write the mapping line even on non-Debian systems"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only show what would be done"),
):
    """
    Set the hostname and reconcile /etc/hosts
    
    Examples:
        hostkit hostname web01
        hostkit hostname web01 --fqdn web01.example.com --cloud-init
    """
    if not new_hostname:
        typer.echo(ctx.get_help(), err=True)
        reporter.error("missing NEW_HOSTNAME")
        raise typer.Exit(1)
    
    try:
        target = HostnameTarget.parse(new_hostname, fqdn)
        settings = settings_for(ctx)
        
        with create_context(settings, dry_run=dry_run) as exec_ctx:
            service = HostnameService(
                exec_ctx,
                on_plan=reporter.info,
                on_hosts_updated=lambda action, detail: reporter.success(
                    f"/etc/hosts {ACTION_LABELS[action]}: {detail}"
                ),
                on_hosts_skipped=reporter.warning,
            )
            report = service.apply(
                HostnameRequest(
                    target=target,
                    update_hosts=not no_hosts,
                    cloud_init=cloud_init,
                    force_hosts=force_hosts,
                )
            )
            if report.dry_run:
                return
            
            reporter.success(f"Hostname set to {target.short}")
            if report.preserve_written:
                reporter.success("cloud-init: preserve_hostname enabled")
            for template in report.templates_patched:
                reporter.success(f"cloud-init: patched {template}")
            reporter.panel(service.verify(), title="Verification")
    
    except ValidationError as e:
        reporter.error(str(e), label="Invalid")
        raise typer.Exit(1)
    except PrecheckError as e:
        reporter.error(str(e), label="Precheck")
        raise typer.Exit(1)
    except HostkitError as e:
        reporter.error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        logger.exception("Failed to set hostname")
        reporter.error(f"Failed to set hostname: {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error while setting hostname")
        reporter.error(f"Unexpected error: {e}")
        raise typer.Exit(1)
