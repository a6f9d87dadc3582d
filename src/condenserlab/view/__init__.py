"""
The VIEW layer: Qt widgets only.
Panels read snapshots from the LabSession and call its operations; they never
touch the circuit fields directly.
"""
