"""
Bangladesh Construction Price List

Common construction material and labor rates in Bangladesh, in BDT per
unit. Prices are market estimates and vary by location and season.
"""

from typing import Iterable, Optional

from pydantic import Field

from buildledger.models.base import ReferenceModel

# Flat VAT applied to price-list estimates.
PRICE_LIST_VAT_RATE = 15

PRICE_LIST_UPDATED = "2025-02-01"

PRICE_LIST_DISCLAIMER = (
    "এই মূল্যতালিকা শুধুমাত্র একটি অনুমানিক নির্দেশিকা। প্রকৃত মূল্য অবস্থান, "
    "বাজার পরিস্থিতি এবং সরবরাহকারীর উপর নির্ভর করে পরিবর্তিত হতে পারে।"
)


class PriceItem(ReferenceModel):
    id: str
    name: str
    name_bn: str
    unit: str
    unit_bn: str
    price: float = Field(..., ge=0)
    category: str
    description: Optional[str] = None


class PriceCategory(ReferenceModel):
    id: str
    name: str
    name_bn: str
    icon: str
    items: tuple[PriceItem, ...] = ()


class CostLine(ReferenceModel):
    item: PriceItem
    quantity: float
    cost: float


class MaterialCost(ReferenceModel):
    subtotal: float
    vat: float
    total: float
    details: tuple[CostLine, ...] = ()


# Units shared by many rows: (unit, unit_bn)
_BAG = ("bag", "ব্যাগ")
_KG = ("kg", "কেজি")
_PIECE = ("piece", "পিস")
_CFT = ("cft", "ঘনফুট")
_SQFT = ("sqft", "বর্গফুট")
_LITER = ("liter", "লিটার")
_METER = ("meter", "মিটার")
_DAY = ("day", "দিন")
_POINT = ("point", "পয়েন্ট")


def _category(
    category_id: str,
    name: str,
    name_bn: str,
    icon: str,
    rows: Iterable[tuple],
) -> PriceCategory:
    items = []
    for row in rows:
        item_id, item_name, item_name_bn, (unit, unit_bn), price, *rest = row
        items.append(PriceItem(
            id=item_id,
            name=item_name,
            name_bn=item_name_bn,
            unit=unit,
            unit_bn=unit_bn,
            price=price,
            category=category_id,
            description=rest[0] if rest else None,
        ))
    return PriceCategory(
        id=category_id, name=name, name_bn=name_bn, icon=icon, items=tuple(items)
    )


MATERIAL_PRICES: tuple[PriceCategory, ...] = (
    _category("cement", "Cement", "সিমেন্ট", "package", [
        ("cement-1", "Ordinary Portland Cement (OPC)", "অর্ডিনারি পোর্টল্যান্ড সিমেন্ট", _BAG, 520, "50 kg bag"),
        ("cement-2", "Portland Composite Cement (PCC)", "পোর্টল্যান্ড কম্পোজিট সিমেন্ট", _BAG, 480, "50 kg bag"),
        ("cement-3", "White Cement", "সাদা সিমেন্ট", _BAG, 1200, "25 kg bag"),
    ]),
    _category("steel", "Steel & Rod", "স্টিল ও রড", "activity", [
        ("steel-1", "60 Grade MS Rod (10mm)", "৬০ গ্রেড এমএস রড (১০মিমি)", _KG, 95),
        ("steel-2", "60 Grade MS Rod (12mm)", "৬০ গ্রেড এমএস রড (১২মিমি)", _KG, 95),
        ("steel-3", "60 Grade MS Rod (16mm)", "৬০ গ্রেড এমএস রড (১৬মিমি)", _KG, 95),
        ("steel-4", "60 Grade MS Rod (20mm)", "৬০ গ্রেড এমএস রড (২০মিমি)", _KG, 95),
        ("steel-5", "40 Grade MS Rod", "৪০ গ্রেড এমএস রড", _KG, 88),
        ("steel-6", "Structural Steel", "স্ট্রাকচারাল স্টিল", _KG, 110),
    ]),
    _category("bricks", "Bricks & Blocks", "ইট ও ব্লক", "grid", [
        ("brick-1", "First Class Bricks (Pakki)", "পাকা ইট (প্রথম শ্রেণী)", _PIECE, 12),
        ("brick-2", "Second Class Bricks", "দ্বিতীয় শ্রেণীর ইট", _PIECE, 9),
        ("brick-3", "Concrete Blocks", "কংক্রিট ব্লক", _PIECE, 45),
        ("brick-4", "Hollow Blocks", "হোলো ব্লক", _PIECE, 55),
        ("brick-5", "Ceramic Bricks", "সিরামিক ইট", _PIECE, 18),
    ]),
    _category("sand", "Sand & Aggregates", "বালি ও পাথর", "layers", [
        ("sand-1", "Mawa Sand (River)", "মাওয়া বালি (নদী)", _CFT, 45),
        ("sand-2", "Sylhet Sand", "সিলেটের বালি", _CFT, 55),
        ("sand-3", 'Stone Chips (1/2")', 'পাথরের চিপস (১/২")', _CFT, 85),
        ("sand-4", 'Stone Chips (3/4")', 'পাথরের চিপস (৩/৪")', _CFT, 90),
        ("sand-5", "Stone Dust", "পাথরের গুঁড়া", _CFT, 40),
        ("sand-6", "Brick Chips", "ইটের চিপস", _CFT, 35),
    ]),
    _category("wood", "Wood & Timber", "কাঠ ও টিম্বার", "box", [
        ("wood-1", "Teak Wood (Segun)", "সেগুন কাঠ", _CFT, 2500),
        ("wood-2", "Chittagong Wood", "চট্টগ্রামের কাঠ", _CFT, 1800),
        ("wood-3", "Garjan Wood", "গর্জন কাঠ", _CFT, 2200),
        ("wood-4", "Plywood (18mm)", "প্লাইউড (১৮মিমি)", _SQFT, 120),
        ("wood-5", "MDF Board", "এমডিএফ বোর্ড", _SQFT, 80),
    ]),
    _category("tiles", "Tiles & Flooring", "টাইলস ও ফ্লোরিং", "layout", [
        ("tile-1", "Ceramic Wall Tiles", "সিরামিক ওয়াল টাইলস", _SQFT, 35),
        ("tile-2", "Ceramic Floor Tiles", "সিরামিক ফ্লোর টাইলস", _SQFT, 45),
        ("tile-3", "Porcelain Tiles", "পরসেলিন টাইলস", _SQFT, 85),
        ("tile-4", "Vitrified Tiles", "ভিট্রিফাইড টাইলস", _SQFT, 120),
        ("tile-5", "Marble Tiles", "মার্বেল টাইলস", _SQFT, 250),
        ("tile-6", "Granite Tiles", "গ্রানাইট টাইলস", _SQFT, 350),
    ]),
    _category("paint", "Paint & Chemicals", "পেইন্ট ও রসায়ন", "droplet", [
        ("paint-1", "Plastic Paint (per liter)", "প্লাস্টিক পেইন্ট (প্রতি লিটার)", _LITER, 280),
        ("paint-2", "Enamel Paint", "ইনামেল পেইন্ট", _LITER, 450),
        ("paint-3", "Distemper", "ডিস্টেম্পার", _KG, 150),
        ("paint-4", "Primer", "প্রাইমার", _LITER, 320),
        ("paint-5", "Wall Putty", "ওয়াল পুটি", _KG, 45),
        ("paint-6", "Waterproofing Chemical", "ওয়াটারপ্রুফিং কেমিক্যাল", _LITER, 380),
    ]),
    _category("electrical", "Electrical Items", "ইলেকট্রিক্যাল সামগ্রী", "zap", [
        ("elec-1", "2.5mm Wire (BRB)", "২.৫মিমি তার (বিআরবি)", _METER, 35),
        ("elec-2", "4mm Wire (BRB)", "৪মিমি তার (বিআরবি)", _METER, 55),
        ("elec-3", "6mm Wire (BRB)", "৬মিমি তার (বিআরবি)", _METER, 85),
        ("elec-4", "Switch Board (5-pin)", "সুইচ বোর্ড (৫-পিন)", _PIECE, 120),
        ("elec-5", "LED Bulb (12W)", "এলইডি বাল্ব (১২ওয়াট)", _PIECE, 180),
        ("elec-6", "Ceiling Fan", "সিলিং ফ্যান", _PIECE, 2500),
        ("elec-7", "Circuit Breaker (32A)", "সার্কিট ব্রেকার (৩২এ)", _PIECE, 450),
    ]),
    _category("plumbing", "Plumbing Items", "প্লাম্বিং সামগ্রী", "anchor", [
        ("plumb-1", 'uPVC Pipe (1")', 'ইউপিভিসি পাইপ (১")', _METER, 85),
        ("plumb-2", 'uPVC Pipe (2")', 'ইউপিভিসি পাইপ (২")', _METER, 150),
        ("plumb-3", 'GI Pipe (1")', 'জিআই পাইপ (১")', _METER, 450),
        ("plumb-4", "Water Tap", "ওয়াটার ট্যাপ", _PIECE, 350),
        ("plumb-5", "Wash Basin", "ওয়াশ বেসিন", _PIECE, 2500),
        ("plumb-6", "Commode", "কমোড", _PIECE, 5500),
        ("plumb-7", "Water Tank (1000L)", "ওয়াটার ট্যাংক (১০০০লি)", _PIECE, 8500),
    ]),
    _category("glass", "Glass & Aluminum", "কাঁচ ও অ্যালুমিনিয়াম", "square", [
        ("glass-1", "Clear Glass (5mm)", "স্বচ্ছ কাঁচ (৫মিমি)", _SQFT, 85),
        ("glass-2", "Tinted Glass (5mm)", "টিনটেড কাঁচ (৫মিমি)", _SQFT, 120),
        ("glass-3", "Reflective Glass", "রিফ্লেক্টিভ কাঁচ", _SQFT, 250),
        ("glass-4", "Aluminum Section", "অ্যালুমিনিয়াম সেকশন", _KG, 320),
        ("glass-5", "Aluminum Window Frame", "অ্যালুমিনিয়াম উইন্ডো ফ্রেম", _SQFT, 450),
    ]),
)

LABOR_RATES: tuple[PriceCategory, ...] = (
    _category("masonry", "Masonry Work", "রাজমিস্ত্রির কাজ", "hard-hat", [
        ("mason-1", "Master Mason (Rajmistri)", "মাস্টার রাজমিস্ত্রি", _DAY, 1200),
        ("mason-2", "Helper (Noukar)", "সহকারী (নৌকর)", _DAY, 700),
        ("mason-3", "Brick Work (per sqft)", "ইটের কাজ (প্রতি বর্গফুট)", _SQFT, 45),
        ("mason-4", "Plaster Work (per sqft)", "প্লাস্টার কাজ (প্রতি বর্গফুট)", _SQFT, 35),
        ("mason-5", "Tile Fitting (per sqft)", "টাইলস বসানো (প্রতি বর্গফুট)", _SQFT, 40),
    ]),
    _category("carpentry", "Carpentry Work", "কাঠমিস্ত্রির কাজ", "tool", [
        ("carp-1", "Master Carpenter", "মাস্টার কাঠমিস্ত্রি", _DAY, 1100),
        ("carp-2", "Helper", "সহকারী", _DAY, 650),
        ("carp-3", "Door Frame (per cft)", "দরজার ফ্রেম (প্রতি ঘনফুট)", _CFT, 350),
        ("carp-4", "Window Frame (per cft)", "জানালার ফ্রেম (প্রতি ঘনফুট)", _CFT, 320),
        ("carp-5", "False Ceiling (per sqft)", "ফলস সিলিং (প্রতি বর্গফুট)", _SQFT, 85),
    ]),
    _category("electrical-labor", "Electrical Work", "ইলেকট্রিক্যাল কাজ", "zap", [
        ("elec-lab-1", "Electrician (Master)", "ইলেকট্রিশিয়ান (মাস্টার)", _DAY, 1000),
        ("elec-lab-2", "Electrician (Helper)", "ইলেকট্রিশিয়ান (সহকারী)", _DAY, 600),
        ("elec-lab-3", "Wiring (per point)", "ওয়্যারিং (প্রতি পয়েন্ট)", _POINT, 350),
        ("elec-lab-4", "Fan Installation", "ফ্যান ইনস্টলেশন", _PIECE, 250),
        ("elec-lab-5", "Light Fitting", "লাইট ফিটিং", _PIECE, 150),
    ]),
    _category("plumbing-labor", "Plumbing Work", "প্লাম্বিং কাজ", "anchor", [
        ("plumb-lab-1", "Plumber (Master)", "প্লাম্বার (মাস্টার)", _DAY, 1100),
        ("plumb-lab-2", "Plumber (Helper)", "প্লাম্বার (সহকারী)", _DAY, 650),
        ("plumb-lab-3", "Water Line (per point)", "ওয়াটার লাইন (প্রতি পয়েন্ট)", _POINT, 450),
        ("plumb-lab-4", "Sanitary Installation", "স্যানিটারি ইনস্টলেশন", _PIECE, 800),
        ("plumb-lab-5", "Overhead Tank Setup", "ওভারহেড ট্যাংক সেটআপ", _PIECE, 2500),
    ]),
    _category("painting", "Painting Work", "রং করার কাজ", "droplet", [
        ("paint-lab-1", "Painter (Master)", "পেইন্টার (মাস্টার)", _DAY, 900),
        ("paint-lab-2", "Painter (Helper)", "পেইন্টার (সহকারী)", _DAY, 550),
        ("paint-lab-3", "Wall Painting (per sqft)", "দেওয়াল রং (প্রতি বর্গফুট)", _SQFT, 18),
        ("paint-lab-4", "Wood Polishing (per sqft)", "কাঠ পালিশ (প্রতি বর্গফুট)", _SQFT, 45),
        ("paint-lab-5", "Putty Work (per sqft)", "পুটি কাজ (প্রতি বর্গফুট)", _SQFT, 12),
    ]),
    _category("steel-work", "Steel Work", "স্টিলের কাজ", "activity", [
        ("steel-lab-1", "Steel Fitter (Rod Mistri)", "স্টিল ফিটার (রড মিস্ত্রি)", _DAY, 1000),
        ("steel-lab-2", "Steel Binding (per kg)", "স্টিল বাঁধাই (প্রতি কেজি)", _KG, 8),
        ("steel-lab-3", "Shuttering (per sqft)", "শাটারিং (প্রতি বর্গফুট)", _SQFT, 35),
    ]),
)


def get_all_price_categories() -> list[PriceCategory]:
    return list(MATERIAL_PRICES + LABOR_RATES)


def get_price_category(category_id: str) -> Optional[PriceCategory]:
    for category in MATERIAL_PRICES + LABOR_RATES:
        if category.id == category_id:
            return category
    return None


def get_price_item(item_id: str) -> Optional[PriceItem]:
    for category in MATERIAL_PRICES + LABOR_RATES:
        for item in category.items:
            if item.id == item_id:
                return item
    return None


def search_price_items(query: str) -> list[PriceItem]:
    """
    Find price items by name or category.

    English names and category ids match case-insensitively; Bengali
    names match on the raw substring.
    """
    lower = query.lower()
    results = []
    for category in MATERIAL_PRICES + LABOR_RATES:
        for item in category.items:
            if (
                lower in item.name.lower()
                or query in item.name_bn
                or lower in item.category.lower()
            ):
                results.append(item)
    return results


def calculate_material_cost(
    items: Iterable[tuple[str, float]],
) -> MaterialCost:
    """
    Price a shopping list of (item_id, quantity) pairs.

    Unknown item ids are skipped. VAT is a flat 15% on the subtotal.
    """
    subtotal = 0.0
    details = []
    for item_id, quantity in items:
        item = get_price_item(item_id)
        if item is None:
            continue
        cost = item.price * quantity
        subtotal += cost
        details.append(CostLine(item=item, quantity=quantity, cost=cost))

    vat = subtotal * PRICE_LIST_VAT_RATE / 100
    return MaterialCost(
        subtotal=subtotal,
        vat=vat,
        total=subtotal + vat,
        details=tuple(details),
    )
