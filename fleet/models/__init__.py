# Fleet API: database models
# Import all models here for SQLAlchemy discovery

from fleet.models.user import User, Role                                   # noqa
from fleet.models.access_token import AccessToken                          # noqa
from fleet.models.vehicle import Vehicle, VehicleStatus                    # noqa
from fleet.models.vehicle_document import VehicleDocument, DocumentType    # noqa
from fleet.models.maintenance import Maintenance                           # noqa
from fleet.models.vehicle_exchange import VehicleExchange, ExchangeStatus  # noqa
