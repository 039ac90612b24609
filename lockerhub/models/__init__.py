# LockerHub — Database Models
# Import all models here for SQLAlchemy discovery

from lockerhub.models.user import User                            # noqa
from lockerhub.models.locker import Locker                        # noqa
from lockerhub.models.package import Package                      # noqa
from lockerhub.models.session import LockerSession                # noqa
from lockerhub.models.audit_log import AssignmentLog, PickupLog   # noqa
