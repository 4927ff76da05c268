"""Shared archive constants."""

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Character stats
ATTRIBUTES = ("strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma")
RESOURCES = ("health", "stamina", "mana")
ATTRIBUTE_RANGE = (1, 20)
MIN_RESOURCE = 1
EQUIPMENT_SLOTS = (
    "primary_weapon",
    "secondary_weapon",
    "shield",
    "armor",
    "first_ring",
    "second_ring",
    "amulet",
)

# Races
MODIFIER_RANGE = (-10, 10)

# Items
RARITIES = ("common", "uncommon", "rare", "epic", "legendary")
ITEM_FLAGS = (
    "is_weapon",
    "is_shield",
    "is_armor",
    "is_accessory",
    "is_consumable",
    "is_quest_item",
    "is_crafting_material",
    "is_miscellaneous",
)
MAX_ITEM_STAT = 50
DURABILITY_RANGE = (1, 10000)
MAX_CONSUMABLE_DURABILITY = 100
MIN_QUEST_ITEM_DURABILITY = 1000

# Users
USER_NAME_LENGTH = (2, 50)
MIN_PASSWORD_LENGTH = 8
DEFAULT_PASSWORD_HASH_METHOD = "scrypt"

# Images (metadata only)
IMAGE_EXTENSIONS = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/webp": ("webp",),
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_IMAGE_DIMENSION = 2048
MAX_IMAGES_PER_USER = 100
