# Import every model so Base.metadata (create_all, alembic) sees all tables
from groundbook.db.session import Base  # noqa: F401
from groundbook.models.user import User  # noqa: F401
from groundbook.models.ground import Ground  # noqa: F401
from groundbook.models.booking import Booking  # noqa: F401
