class ProvisioningError(Exception):
    """Base class for database provisioning failures"""


class RPCUnavailableError(ProvisioningError):
    """The public.exec_sql function is not installed"""


class SQLExecutionError(ProvisioningError):
    """A provisioning script was rejected by the database"""
