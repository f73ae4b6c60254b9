"""
cloud-init integration: keep cloud-init from resetting the hostname
"""
import re
from pathlib import Path
from typing import List

from ...core.constants import (
    CLOUD_DIR,
    CLOUD_HOSTS_TEMPLATE_GLOB,
    CLOUD_PRESERVE_CFG_PATH,
    CLOUD_TEMPLATES_DIR,
    LOOPBACK_ALIAS_ANCHOR,
    TEXT_ENCODING,
    TEXT_ERRORS,
)
from ...core.context import ExecutionContext
from ...core.logging import get_logger
from ...core.utils import backup_file, join_lines, read_lines
from .hosts_file import replace_anchor_line
from .models import HostnameTarget

logger = get_logger(__name__)

PRESERVE_ENABLED = re.compile(r"^\s*preserve_hostname\s*:\s*true", re.MULTILINE)

PRESERVE_CONTENT = (
    "# written by hostkit: prevent cloud-init from overriding hostname on reboot\n"
    "preserve_hostname: true\n"
)


def cloud_init_present(ctx: ExecutionContext) -> bool:
    return ctx.path(CLOUD_DIR).is_dir() and ctx.runner.which("cloud-init") is not None


def set_preserve_hostname(ctx: ExecutionContext) -> bool:
    """
    Write `preserve_hostname: true` to the drop-in config.
    
    Returns:
        True when the file was written, False when already enabled
    """
    cfg = ctx.path(CLOUD_PRESERVE_CFG_PATH)
    if cfg.is_file():
        if PRESERVE_ENABLED.search(cfg.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)):
            logger.info(f"cloud-init: preserve_hostname already enabled ({cfg})")
            return False
        backup_file(cfg)
    
    cfg.parent.mkdir(parents=True, exist_ok=True)
    ctx.write_file(cfg, PRESERVE_CONTENT, mode=0o644)
    logger.info(f"cloud-init: wrote preserve_hostname: true ({cfg})")
    return True


def patch_hosts_templates(ctx: ExecutionContext, target: HostnameTarget) -> List[Path]:
    """
    Rewrite the 127.0.1.1 line of each hosts template that has one.
    
    Templates without the line are left alone.
    """
    templates_dir = ctx.path(CLOUD_TEMPLATES_DIR)
    if not templates_dir.is_dir():
        logger.info(f"cloud-init: {templates_dir} not found, skipping templates")
        return []
    
    replacement = target.hosts_line()
    patched = []
    for template in sorted(templates_dir.glob(CLOUD_HOSTS_TEMPLATE_GLOB)):
        if not template.is_file():
            continue
        lines = replace_anchor_line(read_lines(template), replacement, LOOPBACK_ALIAS_ANCHOR)
        if lines is None:
            continue
        backup_file(template)
        ctx.write_file(template, join_lines(lines))
        logger.info(f"cloud-init: patched {template} -> {replacement}")
        patched.append(template)
    
    if not patched:
        logger.info("cloud-init: no hosts template with a 127.0.1.1 line, skipping")
    return patched
