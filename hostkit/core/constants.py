"""
Project constants definitions
"""

# ============================================================
# Managed Paths (resolved against Settings.root)
# ============================================================

HOSTNAME_PATH = "/etc/hostname"
HOSTS_PATH = "/etc/hosts"
DEBIAN_VERSION_PATH = "/etc/debian_version"
OS_RELEASE_PATH = "/etc/os-release"

CLOUD_DIR = "/etc/cloud"
CLOUD_PRESERVE_CFG_PATH = "/etc/cloud/cloud.cfg.d/99-hostname-preserve.cfg"
CLOUD_TEMPLATES_DIR = "/etc/cloud/templates"
CLOUD_HOSTS_TEMPLATE_GLOB = "hosts.*.tmpl"

SSHD_CONFIG_PATH = "/etc/ssh/sshd_config"

# Undecodable bytes in managed files survive a read/write cycle unchanged
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

# ============================================================
# Hosts File
# ============================================================

LOOPBACK_ALIAS_IP = "127.0.1.1"
LOOPBACK_ALIAS_ANCHOR = r"^\s*127\.0\.1\.1\s+"
LOOPBACK_ANCHOR = r"^\s*127\.0\.0\.1\s+"
VERIFY_HOSTS_PATTERN = r"^\s*127\.0\.[01]\.1\s+"

DEBIAN_FAMILY_IDS = ("debian", "ubuntu", "linuxmint", "pop")

# ============================================================
# Backups
# ============================================================

BACKUP_SUFFIX = ".bak."
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# ============================================================
# SSH
# ============================================================

SSH_DIR_MODE = 0o700
AUTHORIZED_KEYS_MODE = 0o600
AUTHORIZED_KEYS_NAME = "authorized_keys"

KEY_ALGORITHM_PREFIXES = ("ssh-", "ecdsa-", "sk-")

DEFAULT_KEYS_URL = "https://example.com/ssh/authorized_keys"
DEFAULT_GITHUB_KEYS_URL = "https://github.com/{user}.keys"

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "HOSTKIT_"
DEFAULT_ROOT = "/"
DEFAULT_LOG_LEVEL = "INFO"
