"""
VM Power Alarm: vCenter alarm that powers a virtual machine back on

This package connects to vCenter, looks up a virtual machine by name and
registers an alarm that fires when the VM is powered off and runs
PowerOnVM_Task on it.
"""

from .vcenter_client import (
    VCenterClient,
    VCenterConnectionError,
    VCenterError,
    VCenterNotConnectedError,
)
from .config import validate_config, parse_service_url
from .alarm_spec import (
    build_alarm_specification,
    build_power_state_alarm_spec,
    build_remediation_action,
    build_trigger_action,
    build_trigger_expression,
)
from .alarm_operations import create_power_state_alarm
