from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    log_default: str = "/var/log/erpnext-installer.log"
    marker_dir: str = "/var/lib/erpnext-installer/markers"
    mariadb_maintenance_cnf: str = "/etc/mysql/debian.cnf"
    mariadb_frappe_cnf: str = "/etc/mysql/mariadb.conf.d/z_frappe.cnf"
    letsencrypt_live: str = "/etc/letsencrypt/live"
    bench_dir_name: str = "frappe-bench"


PATHS = Paths()
