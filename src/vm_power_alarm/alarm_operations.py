"""
Alarm Operations module for VM Power Alarm.

This module provides the workflow that resolves a virtual machine and
registers the power-state alarm on it.
"""

import logging
from typing import Optional

from pyVmomi import vim, vmodl

from .alarm_spec import build_power_state_alarm_spec
from .vcenter_client import VCenterClient

logger = logging.getLogger("vm-power-alarm")


def create_power_state_alarm(
    vcenter_client: VCenterClient, vm_name: str, alarm_name: str
) -> Optional[str]:
    """
    Create an alarm that powers a VM back on when it is powered off.

    Args:
        vcenter_client: A connected VCenterClient.
        vm_name: Name of the virtual machine to monitor.
        alarm_name: Name of the new alarm.

    Returns:
        The managed object id of the new alarm, or None if the VM was not found.

    Raises:
        vim.fault.DuplicateName: an alarm with this name already exists on the VM.
        vim.fault.InvalidName: vCenter rejected the alarm name.
        vmodl.RuntimeFault: any other server or transport fault.
    """
    property_collector = vcenter_client.property_collector
    alarm_manager = vcenter_client.alarm_manager

    vm = vcenter_client.find_vm_by_name(vm_name, property_collector)
    if vm is None:
        return None

    spec = build_power_state_alarm_spec(alarm_name)

    try:
        logger.info(f"Creating alarm '{alarm_name}' on VM '{vm_name}'")
        alarm = alarm_manager.CreateAlarm(entity=vm, spec=spec)
    except vim.fault.DuplicateName:
        logger.error(f"Alarm '{alarm_name}' already exists on VM '{vm_name}'")
        raise
    except vim.fault.InvalidName:
        logger.error(f"Alarm name '{alarm_name}' was rejected by vCenter")
        raise
    except vmodl.RuntimeFault as e:
        logger.error(f"Error creating alarm '{alarm_name}' on VM '{vm_name}': {e.msg}")
        raise

    logger.info(f"Alarm '{alarm_name}' created as {alarm._moId}")
    return alarm._moId
