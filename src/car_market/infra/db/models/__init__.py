from car_market.infra.db.models.base import Base
from car_market.infra.db.models.car import CarImageRow, CarRow, CarSpecificationRow

__all__ = ["Base", "CarImageRow", "CarRow", "CarSpecificationRow"]
