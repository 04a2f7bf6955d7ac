from enum import Enum


class MaintenanceCategory(str, Enum):
    HVAC = "hvac"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    FURNITURE = "furniture"
    CLEANING = "cleaning"
    APPLIANCES = "appliances"
    OTHER = "other"


class MaintenancePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MaintenanceStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class InquiryStatus(str, Enum):
    RECEIVED = "received"
    ADDRESSED = "addressed"
