# models/route.py
# The single route this service books for, and its stages in travel order.

ROUTE_NAME = "Nairobi - Thika"

THIKA_STAGES = [
    "Nairobi Central",
    "Roysambu",
    "Kasarani",
    "Ruiru",
    "Thika Town",
    "Garissa Lodge",
    "Murang'a Road",
]

ORIGIN_STAGE = THIKA_STAGES[0]

# Registration defaults for a new driver
DEFAULT_DEPARTURE_TIME = "08:00"
DEFAULT_DRIVER_STATUS = "active"

# Status written by every driver status report
STATUS_UPDATED = "updated"
