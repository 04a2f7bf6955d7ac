from .maintenance import MaintenanceRequest
from .inquiries import Inquiry
