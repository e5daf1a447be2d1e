"""Name, address and schedule tables used by the synthetic places generators."""
from typing import Dict, List, Optional, Tuple

# --- Verified-style generator ---

def business_templates(category_key: str, city: Optional[str]) -> List[str]:
    """Plausible business names, keyed by the first word of the city name."""
    prefix = (city or "City").split(" ")[0]
    templates = {
        "restaurant": [
            f"{prefix} Dhaba", "Royal Restaurant", "Punjabi Tadka", "South Indian Corner",
            "Biryani House", "Family Restaurant", f"Hotel {prefix}", "Spice Garden",
            "Maharaja Restaurant", "Golden Palace", "Taste of India", "Local Kitchen",
        ],
        "cafe": [
            f"Chai Point {prefix}", "Coffee Day", "Brew & Beans", "Tea Junction",
            "Cafe Mocha", f"{prefix} Coffee House", "Bean There", "Espresso Corner",
        ],
        "lodging": [
            f"Hotel {prefix}", "OYO Rooms", "Guest House", "Lodge Palace",
            f"{prefix} Inn", "Comfort Stay", "Budget Hotel", "Traveler's Rest",
        ],
        "gas_station": [
            "Indian Oil Petrol Pump", "HP Petrol Station", "Bharat Petroleum",
            "Reliance Petrol Pump", "Shell Station", f"Fuel Station {prefix}",
            "Petrol Bunk", "Energy Station",
        ],
        "shopping": [
            f"{prefix} Market", "Big Bazaar", "Reliance Fresh", "More Supermarket",
            "Local Market", "City Mall", "Super Market", "General Store",
        ],
        "hospital": [
            f"{prefix} Hospital", "City Clinic", "Health Center", "Medical Center",
            "Multispecialty Hospital", "Government Hospital", "Nursing Home", "Apollo Clinic",
        ],
        "bank": [
            "State Bank of India", "HDFC Bank", "ICICI Bank", "Axis Bank",
            "Punjab National Bank", "Bank of Baroda", "Canara Bank", "Union Bank",
        ],
        "transport": [
            f"{prefix} Railway Station", "Bus Stand", "Metro Station", "Auto Stand",
            "Taxi Stand", "Bus Terminal", "Transport Hub", f"ISBT {prefix}",
        ],
        "entertainment": [
            f"{prefix} Park", "City Garden", "PVR Cinemas", "INOX",
            "Fun City", "Entertainment Zone", "Amusement Park", "Recreation Center",
        ],
    }
    readable = category_key.replace("_", " ")
    return templates.get(category_key, [f"{prefix} {readable}", f"Local {readable}"])


STREETS = ["Main Road", "Station Road", "Market Road", "Gandhi Road", "Nehru Street", "MG Road"]
AREAS = ["City Center", "Market Area", "Station Area", "Civil Lines", "Model Town"]
PHONE_PREFIXES = ["+91-98", "+91-99", "+91-97", "+91-96", "+91-95"]

CATEGORY_HOURS: Dict[str, List[str]] = {
    "restaurant": ["9:00 AM - 11:00 PM", "11:00 AM - 10:30 PM", "8:00 AM - 10:00 PM"],
    "cafe": ["7:00 AM - 10:00 PM", "8:00 AM - 9:00 PM", "6:00 AM - 11:00 PM"],
    "lodging": ["24 Hours", "Check-in: 2:00 PM, Check-out: 12:00 PM"],
    "gas_station": ["24 Hours", "6:00 AM - 10:00 PM"],
    "shopping": ["9:00 AM - 9:00 PM", "10:00 AM - 8:00 PM", "8:00 AM - 10:00 PM"],
    "hospital": ["24 Hours", "9:00 AM - 6:00 PM", "8:00 AM - 8:00 PM"],
    "bank": ["10:00 AM - 4:00 PM", "9:30 AM - 3:30 PM", "10:00 AM - 5:00 PM"],
    "transport": ["24 Hours", "5:00 AM - 11:00 PM"],
    "entertainment": ["10:00 AM - 10:00 PM", "9:00 AM - 9:00 PM", "11:00 AM - 11:00 PM"],
}
DEFAULT_HOURS = ["9:00 AM - 9:00 PM"]

# --- Deterministic generator ---

BASE_NAMES: Dict[str, List[str]] = {
    "restaurant": ["Punjabi Dhaba", "South Indian Corner", "Biryani House", "Dosa Plaza", "Thali Restaurant", "Chinese Dragon", "Pizza Corner", "Local Dhaba", "Family Restaurant", "Food Court", "Snack Center"],
    "cafe": ["Chai Point", "Coffee Day", "Barista", "Tea Junction", "Café Mocha", "Brew & Beans", "Tea Time", "Coffee House", "Chai Tapri", "Coffee Corner"],
    "lodging": ["OYO Rooms", "Treebo Hotel", "Guest House", "Lodge Palace", "Resort Inn", "Dharamshala", "Backpacker Hostel", "Budget Hotel", "Inn & Suites"],
    "gas_station": ["Indian Oil", "HP Petrol Pump", "Bharat Petroleum", "Reliance Petrol", "Shell Station", "Essar Oil", "Fuel Station", "Petrol Bunk"],
    "shopping": ["Big Bazaar", "Reliance Fresh", "More Supermarket", "Spencer's", "Kirana Store", "General Store", "City Mall", "Local Market", "Mini Mart"],
    "hospital": ["Apollo Hospital", "Fortis Healthcare", "Max Hospital", "Government Hospital", "Nursing Home", "Medical Center", "City Clinic", "Health Center"],
    "bank": ["State Bank of India", "HDFC Bank", "ICICI Bank", "Axis Bank", "Punjab National Bank", "Bank of Baroda", "Canara Bank", "ATM Center"],
    "transport": ["Railway Station", "Bus Stand", "Metro Station", "Auto Stand", "Taxi Stand", "ISBT", "Bus Terminal"],
    "entertainment": ["PVR Cinemas", "INOX", "Cinepolis", "City Park", "Garden", "Museum", "Art Gallery", "Fun City"],
    "education": ["Government School", "Private School", "CBSE School", "College", "Coaching Center", "Study Center", "Academy"],
    "religious": ["Hanuman Temple", "Shiva Temple", "Gurudwara", "Mosque", "Church", "Ashram", "Dargah"],
    "government": ["Collectorate", "Tehsil Office", "Municipal Office", "Post Office", "Police Station", "District Office"],
    "automotive": ["Car Service Center", "Garage", "Mechanic Shop", "Spare Parts", "Car Wash", "Tyre Shop"],
    "beauty": ["Beauty Parlour", "Hair Salon", "Spa Center", "Barber Shop", "Unisex Salon", "Beauty Studio"],
    "electronics": ["Mobile Shop", "Electronics Store", "Computer Shop", "Laptop Repair", "Mobile Repair", "Gadget Store"],
    "clothing": ["Cloth Shop", "Tailor", "Boutique", "Saree Center", "Garment Store", "Textile Shop"],
    "grocery": ["Kirana Store", "General Store", "Provision Store", "Grocery Shop", "Daily Needs", "Convenience Store"],
    "medical": ["Doctor Clinic", "Dental Clinic", "Medical Store", "Pathology Lab", "Pharmacy", "Diagnostic Center"],
    "sports": ["Fitness Gym", "Sports Club", "Cricket Ground", "Badminton Court", "Swimming Pool", "Sports Complex"],
}

# (name, lat_min, lat_max, lng_min, lng_max, regional names, address areas)
METRO_REGIONS: List[Tuple[str, float, float, float, float, Dict[str, List[str]], List[str]]] = [
    ("New Delhi", 28.4, 28.9, 76.8, 77.5, {
        "restaurant": ["Paranthe Wali Gali", "Karim's", "Al Jawahar", "Chandni Chowk Dhaba"],
        "cafe": ["Indian Coffee House", "Cafe Coffee Day CP"],
        "shopping": ["Connaught Place Market", "Karol Bagh Market", "Lajpat Nagar Market"],
    }, ["Connaught Place", "Khan Market", "Karol Bagh", "Lajpat Nagar", "Defence Colony", "Greater Kailash", "Saket", "Hauz Khas"]),
    ("Mumbai", 18.8, 19.3, 72.7, 73.2, {
        "restaurant": ["Trishna", "Leopold Cafe", "Britannia & Co", "Bademiya"],
        "cafe": ["Theobroma", "Cafe Coffee Day Bandra"],
        "shopping": ["Linking Road", "Colaba Causeway", "Crawford Market"],
    }, ["Andheri West", "Bandra", "Juhu", "Powai", "Malad", "Borivali", "Colaba", "Fort"]),
    ("Bengaluru", 12.8, 13.2, 77.4, 77.8, {
        "restaurant": ["MTR", "Vidyarthi Bhavan", "Koshy's", "Corner House"],
        "cafe": ["Third Wave Coffee", "Blue Tokai"],
        "shopping": ["Commercial Street", "Brigade Road", "Chickpet Market"],
    }, ["Koramangala", "Indiranagar", "Whitefield", "Electronic City", "HSR Layout", "Jayanagar"]),
    ("Chennai", 13.0, 13.2, 80.1, 80.3, {}, ["T Nagar", "Anna Nagar", "Adyar", "Velachery", "Mylapore", "Nungambakkam"]),
]

FALLBACK_CITIES = [
    "Agra", "Lucknow", "Kanpur", "Jaipur", "Indore", "Bhopal", "Patna", "Nagpur", "Surat", "Vadodara",
    "Rajkot", "Coimbatore", "Madurai", "Kochi", "Thiruvananthapuram", "Visakhapatnam", "Vijayawada",
    "Guntur", "Mysore", "Mangalore",
]
GENERIC_AREAS = ["MG Road", "Gandhi Nagar", "Civil Lines", "Model Town", "Sadar Bazaar", "Main Market", "Station Road", "Mall Road"]
LANDMARKS = ["Near Metro Station", "Near Bus Stop", "Near Hospital", "Near Mall", "Near Park", "Main Road", "Market Area"]
GENERIC_HOURS = [
    "9:00 AM - 9:00 PM", "10:00 AM - 10:00 PM", "8:00 AM - 8:00 PM", "24 Hours",
    "6:00 AM - 11:00 PM", "11:00 AM - 11:00 PM", "7:00 AM - 10:00 PM", "8:00 AM - 9:00 PM",
]


def metro_region(lat: float, lng: float):
    for region in METRO_REGIONS:
        _, lat_min, lat_max, lng_min, lng_max, _, _ = region
        if lat_min <= lat <= lat_max and lng_min <= lng <= lng_max:
            return region
    return None


def regional_names(lat: float, lng: float, category_key: str, fallback: str) -> List[str]:
    region = metro_region(lat, lng)
    local = region[5].get(category_key, []) if region else []
    names = local + BASE_NAMES.get(category_key, [])
    return names or [fallback]
