"""
Place category table and OSM tag matching rules.

The table is built once at import into a read-only mapping of frozen
models; nothing in the process can modify it.
"""
from types import MappingProxyType
from typing import Mapping, Optional

from places_finder.models.places_model import CategoryDefinition

_CATEGORY_ROWS = (
    ("restaurant", "Restaurants & Food", "🍽️", ("amenity=restaurant", "amenity=fast_food", "cuisine=indian")),
    ("cafe", "Cafes & Tea Stalls", "☕", ("amenity=cafe", "shop=tea")),
    ("lodging", "Hotels & Lodging", "🏨", ("tourism=hotel", "tourism=guest_house")),
    ("gas_station", "Petrol Pumps", "⛽", ("amenity=fuel",)),
    ("shopping", "Shopping & Markets", "🛍️", ("shop=supermarket", "shop=convenience", "amenity=marketplace")),
    ("hospital", "Healthcare & Pharmacy", "🏥", ("amenity=hospital", "amenity=pharmacy", "amenity=clinic")),
    ("bank", "Banks & ATMs", "🏦", ("amenity=bank", "amenity=atm")),
    ("transport", "Transportation", "🚌", ("amenity=bus_station", "railway=station", "public_transport=station")),
    ("entertainment", "Parks & Attractions", "🎬", ("leisure=park", "tourism=attraction", "amenity=cinema")),
    ("education", "Schools & Colleges", "🎓", ("amenity=school", "amenity=college", "amenity=university")),
    ("religious", "Temples & Religious", "🕉️", ("amenity=place_of_worship", "building=temple")),
    ("government", "Government Offices", "🏛️", ("office=government", "amenity=townhall", "office=administrative")),
    ("automotive", "Auto Services", "🔧", ("shop=car_repair", "amenity=car_wash", "shop=car")),
    ("beauty", "Salons & Spas", "💄", ("shop=hairdresser", "shop=beauty", "leisure=spa")),
    ("electronics", "Electronics & Mobile", "📱", ("shop=electronics", "shop=mobile_phone", "shop=computer")),
    ("clothing", "Clothing & Textiles", "👕", ("shop=clothes", "shop=tailor", "shop=fabric")),
    ("grocery", "Grocery & Provisions", "🛒", ("shop=grocery", "shop=general", "shop=convenience")),
    ("medical", "Medical & Dental", "⚕️", ("amenity=doctors", "amenity=dentist", "healthcare=clinic")),
    ("sports", "Sports & Fitness", "⚽", ("leisure=sports_centre", "leisure=fitness_centre", "sport=cricket")),
)

PLACE_CATEGORIES: Mapping[str, CategoryDefinition] = MappingProxyType({
    key: CategoryDefinition(key=key, display_name=name, icon=icon, match_tags=tags)
    for key, name, icon, tags in _CATEGORY_ROWS
})

AMENITY_FALLBACK = MappingProxyType({
    "restaurant": "restaurant",
    "fast_food": "restaurant",
    "cafe": "cafe",
    "fuel": "gas_station",
    "hospital": "hospital",
    "pharmacy": "hospital",
    "clinic": "hospital",
    "bank": "bank",
    "atm": "bank",
    "school": "education",
    "college": "education",
    "university": "education",
    "place_of_worship": "religious",
    "cinema": "entertainment",
    "theatre": "entertainment",
})

SHOP_FALLBACK = MappingProxyType({
    "supermarket": "shopping",
    "convenience": "shopping",
    "mall": "shopping",
    "clothes": "clothing",
    "electronics": "electronics",
    "mobile_phone": "electronics",
    "car_repair": "automotive",
    "hairdresser": "beauty",
    "beauty": "beauty",
})

TOURISM_FALLBACK = MappingProxyType({
    "hotel": "lodging",
    "guest_house": "lodging",
    "hostel": "lodging",
    "attraction": "entertainment",
})

# Tags covered by the live query; kept small so mirrors answer quickly.
LIVE_QUERY_FILTERS = (
    ("amenity", "restaurant|fuel|hospital|bank|atm"),
    ("shop", "supermarket|convenience"),
    ("tourism", "hotel|attraction"),
)


def empty_categories() -> dict:
    return {key: [] for key in PLACE_CATEGORIES}


def category_for_tags(tags: Optional[dict]) -> Optional[str]:
    """Map OSM tags to a category key, or None when no rule matches."""
    if not tags:
        return None

    for key, category in PLACE_CATEGORIES.items():
        for tag in category.match_tags:
            tag_key, tag_value = tag.split("=", 1)
            if tags.get(tag_key) == tag_value:
                return key

    amenity = tags.get("amenity")
    if amenity and amenity in AMENITY_FALLBACK:
        return AMENITY_FALLBACK[amenity]

    shop = tags.get("shop")
    if shop:
        return SHOP_FALLBACK.get(shop, "shopping")

    tourism = tags.get("tourism")
    if tourism and tourism in TOURISM_FALLBACK:
        return TOURISM_FALLBACK[tourism]

    return None
