"""
SSH key provisioning CLI command
"""
from pathlib import Path
from typing import List, Optional

import typer

from ...core.exceptions import HostkitError, PrecheckError, ValidationError
from ...core.logging import get_logger
from ...domain.keys import KeyProvisioningService, KeyProvisionRequest, select_source
from ...domain.sshd import SshdService
from ...infrastructure.system import default_target_user
from .reporter import RichReporter
from .runtime import create_context, settings_for

logger = get_logger(__name__)
reporter = RichReporter()


def register_keys_command(app: typer.Typer) -> None:
    """Register ssh-keys command on the main app"""
    app.command(name="ssh-keys")(keys_run)


def keys_run(
    ctx: typer.Context,
    github: Optional[str] = typer.Option(
        None, "-g", "--github", metavar="USER", help="Fetch keys of a GitHub user"
    ),
    url: Optional[str] = typer.Option(None, "-u", "--url", help="Fetch keys from a URL"),
    file: Optional[Path] = typer.Option(None, "-f", "--file", help="Read keys from a local file"),
    key: Optional[List[str]] = typer.Option(
        None, "-k", "--key", help="Public key line (repeatable)"
    ),
    target_user: Optional[str] = typer.Option(
        None, "-t", "--target-user", help="Account to provision (default: $SUDO_USER or current user)"
    ),
    overwrite: bool = typer.Option(
        False, "-o", "--overwrite", help="Replace authorized_keys instead of appending"
    ),
    disable_password: bool = typer.Option(
        False, "-d", "--disable-password", help="Disable password authentication in sshd_config"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Read and check keys without writing"),
):
    """
    Provision SSH public-key access for a user
    
    Examples:
        hostkit ssh-keys -g octocat
        hostkit ssh-keys -k "ssh-ed25519 AAAA... me@laptop" -t deploy -d
    """
    try:
        settings = settings_for(ctx)
        source = select_source(
            github=github,
            url=url,
            file=file,
            keys=key,
            default_url=settings.keys_url,
            github_url_template=settings.github_keys_url,
            timeout=settings.fetch_timeout,
        )
        user = target_user or default_target_user()
        
        with create_context(settings, dry_run=dry_run) as exec_ctx:
            platform = exec_ctx.platform
            service = KeyProvisioningService(
                exec_ctx,
                SshdService(exec_ctx, service_name=platform.ssh_service_name),
                ssh_server_package=platform.ssh_server_package,
                on_keys_loaded=lambda count, origin: reporter.info(
                    f"Loaded {count} key(s) from {origin}"
                ),
                on_daemon_installed=lambda: reporter.success("SSH server installed"),
                on_hardened=lambda: reporter.success("Password authentication disabled"),
            )
            report = service.provision(
                KeyProvisionRequest(
                    source=source,
                    target_user=user,
                    overwrite=overwrite,
                    disable_password=disable_password,
                )
            )
        
        reporter.key_table(
            [(k.algorithm, k.comment, k.fingerprint() or "-") for k in report.keys],
            title=f"Keys for {report.user}",
        )
        if dry_run:
            return
        if report.backup:
            reporter.info(f"Backup: {report.backup}")
        reporter.success(f"{report.added} key(s) added to {report.authorized_keys}")
    
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
        logger.exception("Failed to provision keys")
        reporter.error(f"Failed to provision keys: {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error while provisioning keys")
        reporter.error(f"Unexpected error: {e}")
        raise typer.Exit(1)
