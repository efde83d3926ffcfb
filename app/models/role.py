import enum


class RoleName(str, enum.Enum):
    INVENTORY = "1"
    FLEET     = "2"


INVENTORY_USERTYPE = "inventory"
