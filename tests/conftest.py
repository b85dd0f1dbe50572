"""
Pytest fixtures shared by the VM Power Alarm tests.

The vCenter service is replaced by MagicMock objects; pyVmomi data objects
(specs, faults, managed object references) are real.
"""

from typing import Dict, List, Set, Tuple
from unittest.mock import MagicMock

import pytest
from pyVmomi import vim, vmodl

from vm_power_alarm import config
from vm_power_alarm import vcenter_client as vcenter_client_module
from vm_power_alarm.vcenter_client import VCenterClient


def name_contents(vms: List[Tuple[str, vim.VirtualMachine]]) -> List[vmodl.query.PropertyCollector.ObjectContent]:
    """What RetrieveContents returns for a name-only query over the given VMs."""
    return [
        vmodl.query.PropertyCollector.ObjectContent(
            obj=vm, propSet=[vmodl.DynamicProperty(name="name", val=name)]
        )
        for name, vm in vms
    ]


class FakeAlarmManager:
    """Mimics AlarmManager.CreateAlarm name checks on a per-entity basis."""

    def __init__(self):
        self.created: List[Tuple[object, vim.alarm.AlarmSpec]] = []
        self._names: Dict[str, Set[str]] = {}

    def CreateAlarm(self, entity, spec):
        if not spec.name:
            raise vim.fault.InvalidName(name=spec.name)
        names = self._names.setdefault(entity._moId, set())
        if spec.name in names:
            raise vim.fault.DuplicateName(name=spec.name)
        names.add(spec.name)
        self.created.append((entity, spec))
        return vim.alarm.Alarm(f"alarm-{100 + len(self.created)}")


@pytest.fixture
def web01() -> vim.VirtualMachine:
    return vim.VirtualMachine("vm-42")


@pytest.fixture
def db01() -> vim.VirtualMachine:
    return vim.VirtualMachine("vm-41")


@pytest.fixture
def alarm_manager() -> FakeAlarmManager:
    return FakeAlarmManager()


@pytest.fixture
def view_stub() -> MagicMock:
    """Stub behind the container view; records DestroyView calls."""
    return MagicMock()


@pytest.fixture
def service_instance(web01, db01, alarm_manager, view_stub) -> MagicMock:
    """Service instance whose inventory holds db01 and web01."""
    si = MagicMock()
    content = si.RetrieveContent.return_value
    content.alarmManager = alarm_manager
    content.viewManager.CreateContainerView.return_value = vim.view.ContainerView(
        "session[52a1]52b2", stub=view_stub
    )
    content.propertyCollector.RetrieveContents.return_value = name_contents(
        [("db01", db01), ("web01", web01)]
    )
    return si


@pytest.fixture
def smart_connect(monkeypatch, service_instance) -> MagicMock:
    """Patch SmartConnect/Disconnect so no network is touched."""
    fake_connect = MagicMock(return_value=service_instance)
    fake_disconnect = MagicMock()
    monkeypatch.setattr(vcenter_client_module.connect, "SmartConnect", fake_connect)
    monkeypatch.setattr(vcenter_client_module.connect, "Disconnect", fake_disconnect)
    fake_connect.disconnect = fake_disconnect
    return fake_connect


@pytest.fixture
def connected_client(smart_connect) -> VCenterClient:
    client = VCenterClient(host="vc.example.com", user="admin", password="secret")
    client.connect()
    yield client
    client.disconnect()


@pytest.fixture
def no_log_file(monkeypatch):
    monkeypatch.setattr(config, "LOG_FILE", "")
