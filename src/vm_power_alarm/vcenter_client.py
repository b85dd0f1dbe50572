"""
vCenter Client module for VM Power Alarm.

This module provides the VCenterClient class, the session context that owns
the connection to vCenter and resolves inventory objects for the alarm
workflow.
"""

import logging
from typing import Optional

# Import pyvmomi for vCenter interaction
try:
    from pyVim import connect
    from pyVmomi import vim, vmodl
except ImportError:
    logging.getLogger("vm-power-alarm").error(
        "Failed to import pyvmomi. Make sure it's installed."
    )
    import sys

    sys.exit(1)

from .config import DEFAULT_SDK_PATH

logger = logging.getLogger("vm-power-alarm")


class VCenterError(Exception):
    """Base class for session errors raised by VCenterClient."""


class VCenterConnectionError(VCenterError):
    """Raised when the session to vCenter cannot be established."""


class VCenterNotConnectedError(VCenterError):
    """Raised when the client is used before connect()."""


class VCenterClient:
    """Client for interacting with vCenter."""

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        port: int = 443,
        path: str = DEFAULT_SDK_PATH,
        disable_ssl_verification: bool = True,
    ):
        self.host = host
        self.user = user
        self.password = password
        self.port = port
        self.path = path
        self.disable_ssl_verification = disable_ssl_verification
        self.service_instance = None
        self._content = None

    def __enter__(self) -> "VCenterClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.disconnect()
            return
        # Keep the original fault; a failed logout must not replace it
        try:
            self.disconnect()
        except Exception as e:
            logger.error(f"Error disconnecting from vCenter: {e}")
            self.service_instance = None
            self._content = None

    def connect(self) -> None:
        """
        Connect to vCenter.

        Raises:
            VCenterConnectionError: if the login or transport fails.
        """
        try:
            logger.info(f"Connecting to vCenter at {self.host}:{self.port}")
            self.service_instance = connect.SmartConnect(
                host=self.host,
                user=self.user,
                pwd=self.password,
                port=self.port,
                path=self.path,
                disableSslCertValidation=self.disable_ssl_verification,
            )
        except Exception as e:
            logger.error(f"Failed to connect to vCenter: {e}")
            raise VCenterConnectionError(
                f"Failed to connect to vCenter at {self.host}:{self.port}: {e}"
            ) from e

    def disconnect(self) -> None:
        """Disconnect from vCenter."""
        if self.service_instance:
            connect.Disconnect(self.service_instance)
            logger.info("Disconnected from vCenter")
            self.service_instance = None
            self._content = None

    @property
    def service_content(self) -> vim.ServiceInstanceContent:
        if not self.service_instance:
            raise VCenterNotConnectedError("Not connected to vCenter")
        if self._content is None:
            self._content = self.service_instance.RetrieveContent()
        return self._content

    @property
    def property_collector(self) -> vmodl.query.PropertyCollector:
        return self.service_content.propertyCollector

    @property
    def alarm_manager(self) -> vim.alarm.AlarmManager:
        return self.service_content.alarmManager

    def find_vm_by_name(
        self,
        name: str,
        property_collector: Optional[vmodl.query.PropertyCollector] = None,
    ) -> Optional[vim.VirtualMachine]:
        """
        Look up a virtual machine by its inventory name.

        The names of all VMs are fetched in one RetrieveContents call over a
        container view rooted at the inventory root folder.

        Args:
            name: The display name of the virtual machine.
            property_collector: Collector to query; defaults to the session's.

        Returns:
            The first VirtualMachine with that name, or None if there is none.
        """
        content = self.service_content
        if property_collector is None:
            property_collector = content.propertyCollector

        container = content.viewManager.CreateContainerView(
            content.rootFolder, [vim.VirtualMachine], True
        )
        try:
            traversal_spec = vmodl.query.PropertyCollector.TraversalSpec(
                name="traverseView",
                type=vim.view.ContainerView,
                path="view",
                skip=False,
            )
            object_spec = vmodl.query.PropertyCollector.ObjectSpec(
                obj=container, skip=True, selectSet=[traversal_spec]
            )
            property_spec = vmodl.query.PropertyCollector.PropertySpec(
                type=vim.VirtualMachine, pathSet=["name"], all=False
            )
            filter_spec = vmodl.query.PropertyCollector.FilterSpec(
                objectSet=[object_spec], propSet=[property_spec]
            )
            results = property_collector.RetrieveContents([filter_spec])
        finally:
            container.Destroy()

        for obj_content in results or []:
            for prop in obj_content.propSet:
                if prop.name == "name" and prop.val == name:
                    logger.info(f"Found VM '{name}' ({obj_content.obj._moId})")
                    return obj_content.obj

        logger.info(f"VM '{name}' not found in inventory")
        return None
