"""
Provisioning Domain

Idempotent database provisioning through the exec_sql remote procedure:
table/index/trigger/policy scripts, quick fixes, diagnosis, profile repair
and foreign key relationship management.
"""
