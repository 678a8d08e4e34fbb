"""
Registry of ORM models so Base.metadata knows every table.
"""
from app.auth.models import Admin  # noqa: F401
from app.catalog.models import CreditType, Job, EmploymentType, DisplaySettings  # noqa: F401
from app.simulation.models import Simulation  # noqa: F401
from app.applications.models import CreditApplication  # noqa: F401
from app.notifications.models import Notification  # noqa: F401
