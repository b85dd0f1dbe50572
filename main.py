#!/usr/bin/env python3
"""
VM Power Alarm: create a vCenter alarm that powers a VM back on when it is powered off

Usage:
    python main.py --url https://vcenter/sdk --username USER --password PASS \
        --vmname VMNAME --alarm ALARMNAME
"""

import sys

from vm_power_alarm.main import main

if __name__ == "__main__":
    sys.exit(main())
