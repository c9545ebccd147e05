from .step_10_system_packages import SystemPackagesStage
from .step_15_wkhtmltopdf import WkhtmltopdfStage
from .step_20_mariadb_server import MariaDBServerStage
from .step_25_mariadb_root import MariaDBRootStage
from .step_30_node_runtime import NodeRuntimeStage
from .step_40_bench_cli import BenchCliStage
from .step_50_bench_init import BenchInitStage
from .step_60_new_site import NewSiteStage
from .step_70_install_erpnext import InstallERPNextStage
from .step_80_production import ProductionStage
from .step_85_ssl import SSLCertificateStage

__all__ = [
    "SystemPackagesStage",
    "WkhtmltopdfStage",
    "MariaDBServerStage",
    "MariaDBRootStage",
    "NodeRuntimeStage",
    "BenchCliStage",
    "BenchInitStage",
    "NewSiteStage",
    "InstallERPNextStage",
    "ProductionStage",
    "SSLCertificateStage",
]
