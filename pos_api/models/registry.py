# pos_api/models/registry.py
#
# Imports every mapped class so string relationships resolve, and exposes
# them by name for client-supplied find options.

from pos_api.core.errors import MalformedRequestError
from pos_api.models.employees import Employee
from pos_api.models.inventory import InventoryHistory, InventoryItem
from pos_api.models.items import Item, ItemFeature
from pos_api.models.job_positions import JobPosition
from pos_api.models.orders import Order, RecentOrder
from pos_api.models.sellables import Sellable, SellableCategory, SellableComponent
from pos_api.models.sold_items import SoldItem, SoldSellable
from pos_api.models.thumbnails import Thumbnail

MODELS = {
    model.__name__: model
    for model in (
        Employee,
        InventoryHistory,
        InventoryItem,
        Item,
        ItemFeature,
        JobPosition,
        Order,
        RecentOrder,
        Sellable,
        SellableCategory,
        SellableComponent,
        SoldItem,
        SoldSellable,
        Thumbnail,
    )
}


def lookup_model(name: str):
    try:
        return MODELS[name]
    except KeyError:
        raise MalformedRequestError(f"Invalid model name: {name}") from None
