# Import models here so Base.metadata knows every table.
from salesperf.models.user import User  # noqa: F401
from salesperf.models.region_assignment import RegionAssignment  # noqa: F401
from salesperf.models.sale import Sale  # noqa: F401
from salesperf.models.target import Target  # noqa: F401
