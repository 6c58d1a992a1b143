"""
Construction Expense and Income Categories

Category tables used for budgets, reports and quick-entry presets.
Names are given in English and Bengali.
"""

from typing import Literal, Optional

from pydantic import Field

from buildledger.models.base import ReferenceModel


class SubCategory(ReferenceModel):
    id: str
    name: str
    name_bn: str
    description: Optional[str] = None


class ExpenseCategory(ReferenceModel):
    id: str
    name: str
    name_bn: str
    icon: str
    color: str
    description: str
    subcategories: tuple[SubCategory, ...] = ()


class CategoryRef(ReferenceModel):
    """Flat category entry for pickers."""

    id: str
    name: str
    name_bn: str
    type: Literal["expense", "income"]


class QuickExpense(ReferenceModel):
    """One-tap expense preset."""

    category_id: str
    subcategory_id: str
    description: str
    description_bn: str
    default_amount: Optional[float] = Field(default=None, ge=0)


def _subs(*rows: tuple[str, str, str]) -> tuple[SubCategory, ...]:
    return tuple(SubCategory(id=i, name=n, name_bn=bn) for i, n, bn in rows)


EXPENSE_CATEGORIES: tuple[ExpenseCategory, ...] = (
    ExpenseCategory(
        id="materials",
        name="Materials",
        name_bn="নির্মাণ সামগ্রী",
        icon="package",
        color="#006A4E",
        description="Construction materials and supplies",
        subcategories=_subs(
            ("mat-cement", "Cement", "সিমেন্ট"),
            ("mat-steel", "Steel & Rods", "স্টিল ও রড"),
            ("mat-bricks", "Bricks & Blocks", "ইট ও ব্লক"),
            ("mat-sand", "Sand & Aggregates", "বালি ও পাথর"),
            ("mat-wood", "Wood & Timber", "কাঠ ও টিম্বার"),
            ("mat-tiles", "Tiles & Flooring", "টাইলস ও ফ্লোরিং"),
            ("mat-paint", "Paint & Chemicals", "পেইন্ট ও রসায়ন"),
            ("mat-electrical", "Electrical Items", "ইলেকট্রিক্যাল সামগ্রী"),
            ("mat-plumbing", "Plumbing Items", "প্লাম্বিং সামগ্রী"),
            ("mat-glass", "Glass & Aluminum", "কাঁচ ও অ্যালুমিনিয়াম"),
            ("mat-hardware", "Hardware", "হার্ডওয়্যার"),
            ("mat-other", "Other Materials", "অন্যান্য সামগ্রী"),
        ),
    ),
    ExpenseCategory(
        id="labor",
        name="Labor",
        name_bn="শ্রমিক",
        icon="users",
        color="#F42A41",
        description="Worker wages and labor costs",
        subcategories=_subs(
            ("lab-mason", "Masonry", "রাজমিস্ত্রি"),
            ("lab-carpenter", "Carpentry", "কাঠমিস্ত্রি"),
            ("lab-electrician", "Electrical", "ইলেকট্রিশিয়ান"),
            ("lab-plumber", "Plumbing", "প্লাম্বার"),
            ("lab-painter", "Painting", "পেইন্টার"),
            ("lab-steel", "Steel Work", "স্টিল কাজ"),
            ("lab-helper", "Helpers", "সহকারী শ্রমিক"),
            ("lab-supervisor", "Supervisor", "সুপারভাইজার"),
            ("lab-overtime", "Overtime", "অতিরিক্ত সময়"),
            ("lab-other", "Other Labor", "অন্যান্য শ্রমিক"),
        ),
    ),
    ExpenseCategory(
        id="equipment",
        name="Equipment",
        name_bn="যন্ত্রপাতি",
        icon="truck",
        color="#2196F3",
        description="Equipment rental and purchase",
        subcategories=_subs(
            ("eqp-rental", "Equipment Rental", "যন্ত্রপাতি ভাড়া"),
            ("eqp-purchase", "Equipment Purchase", "যন্ত্রপাতি ক্রয়"),
            ("eqp-maintenance", "Maintenance", "রক্ষণাবেক্ষণ"),
            ("eqp-fuel", "Fuel", "জ্বালানি"),
            ("eqp-transport", "Transportation", "পরিবহন"),
            ("eqp-other", "Other Equipment", "অন্যান্য যন্ত্রপাতি"),
        ),
    ),
    ExpenseCategory(
        id="utilities",
        name="Utilities",
        name_bn="উপযোগিতা",
        icon="zap",
        color="#FF9800",
        description="Electricity, water, and other utilities",
        subcategories=_subs(
            ("utl-electricity", "Electricity", "বিদ্যুৎ"),
            ("utl-water", "Water", "পানি"),
            ("utl-gas", "Gas", "গ্যাস"),
            ("utl-generator", "Generator Fuel", "জেনারেটর জ্বালানি"),
            ("utl-internet", "Internet/Phone", "ইন্টারনেট/ফোন"),
            ("utl-other", "Other Utilities", "অন্যান্য উপযোগিতা"),
        ),
    ),
    ExpenseCategory(
        id="permits",
        name="Permits & Fees",
        name_bn="অনুমতি ও ফি",
        icon="file-text",
        color="#9C27B0",
        description="Government permits and legal fees",
        subcategories=_subs(
            ("perm-building", "Building Permit", "বিল্ডিং পারমিট"),
            ("perm-environment", "Environment Clearance", "পরিবেশ অনুমতি"),
            ("perm-fire", "Fire Safety", "ফায়ার সেফটি"),
            ("perm-rajuk", "RAJUK/Development", "রাজউক/উন্নয়ন"),
            ("perm-legal", "Legal Fees", "আইনি ফি"),
            ("perm-survey", "Survey Fees", "জরিপ ফি"),
            ("perm-other", "Other Permits", "অন্যান্য অনুমতি"),
        ),
    ),
    ExpenseCategory(
        id="consulting",
        name="Professional Services",
        name_bn="পেশাদার সেবা",
        icon="briefcase",
        color="#00BCD4",
        description="Architect, engineer, and consultant fees",
        subcategories=_subs(
            ("prof-architect", "Architect", "স্থপতি"),
            ("prof-engineer", "Structural Engineer", "স্ট্রাকচারাল ইঞ্জিনিয়ার"),
            ("prof-interior", "Interior Designer", "ইন্টেরিয়ার ডিজাইনার"),
            ("prof-consultant", "Consultant", "পরামর্শক"),
            ("prof-project", "Project Manager", "প্রজেক্ট ম্যানেজার"),
            ("prof-accountant", "Accountant", "হিসাবরক্ষক"),
            ("prof-other", "Other Services", "অন্যান্য সেবা"),
        ),
    ),
    ExpenseCategory(
        id="land",
        name="Land & Site",
        name_bn="জমি ও স্থান",
        icon="map-pin",
        color="#795548",
        description="Land related expenses",
        subcategories=_subs(
            ("land-purchase", "Land Purchase", "জমি ক্রয়"),
            ("land-lease", "Land Lease", "জমি লিজ"),
            ("land-clearing", "Site Clearing", "স্থান পরিষ্কার"),
            ("land-leveling", "Site Leveling", "স্থান সমতলকরণ"),
            ("land-fencing", "Site Fencing", "স্থান বেষ্টনী"),
            ("land-security", "Site Security", "স্থান নিরাপত্তা"),
            ("land-other", "Other Land Expenses", "অন্যান্য জমি ব্যয়"),
        ),
    ),
    ExpenseCategory(
        id="office",
        name="Office Expenses",
        name_bn="দফতর ব্যয়",
        icon="home",
        color="#607D8B",
        description="Office and administrative expenses",
        subcategories=_subs(
            ("off-rent", "Office Rent", "দফতর ভাড়া"),
            ("off-stationery", "Stationery", "স্টেশনারি"),
            ("off-printing", "Printing", "প্রিন্টিং"),
            ("off-software", "Software", "সফটওয়্যার"),
            ("off-insurance", "Insurance", "বীমা"),
            ("off-salary", "Staff Salary", "কর্মচারী বেতন"),
            ("off-other", "Other Office", "অন্যান্য দফতর ব্যয়"),
        ),
    ),
    ExpenseCategory(
        id="marketing",
        name="Marketing",
        name_bn="বিপণন",
        icon="speaker",
        color="#E91E63",
        description="Marketing and advertising expenses",
        subcategories=_subs(
            ("mkt-advertising", "Advertising", "বিজ্ঞাপন"),
            ("mkt-brochure", "Brochures/Signs", "ব্রোশিয়ার/সাইনবোর্ড"),
            ("mkt-website", "Website", "ওয়েবসাইট"),
            ("mkt-events", "Events/Exhibitions", "অনুষ্ঠান/প্রদর্শনী"),
            ("mkt-commission", "Sales Commission", "বিক্রয় কমিশন"),
            ("mkt-other", "Other Marketing", "অন্যান্য বিপণন"),
        ),
    ),
    ExpenseCategory(
        id="taxes",
        name="Taxes & VAT",
        name_bn="কর ও ভ্যাট",
        icon="percent",
        color="#4CAF50",
        description="Tax payments and VAT",
        subcategories=_subs(
            ("tax-vat", "VAT", "ভ্যাট"),
            ("tax-income", "Income Tax", "আয়কর"),
            ("tax-advance", "Advance Tax", "অগ্রিম কর"),
            ("tax-ait", "AIT", "এআইটি"),
            ("tax-registration", "Trade License", "ট্রেড লাইসেন্স"),
            ("tax-other", "Other Taxes", "অন্যান্য কর"),
        ),
    ),
    ExpenseCategory(
        id="miscellaneous",
        name="Miscellaneous",
        name_bn="বিবিধ",
        icon="more-horizontal",
        color="#9E9E9E",
        description="Other expenses",
        subcategories=_subs(
            ("misc-gifts", "Gifts/Entertainment", "উপহার/বিনোদন"),
            ("misc-donation", "Donations", "দান"),
            ("misc-penalty", "Penalties", "জরিমানা"),
            ("misc-bank", "Bank Charges", "ব্যাংক চার্জ"),
            ("misc-other", "Other Expenses", "অন্যান্য ব্যয়"),
        ),
    ),
)

INCOME_CATEGORIES: tuple[ExpenseCategory, ...] = (
    ExpenseCategory(
        id="project-income",
        name="Project Income",
        name_bn="প্রকল্প আয়",
        icon="home",
        color="#006A4E",
        description="Income from construction projects",
        subcategories=_subs(
            ("inc-residential", "Residential", "আবাসিক"),
            ("inc-commercial", "Commercial", "বাণিজ্যিক"),
            ("inc-industrial", "Industrial", "শিল্প"),
            ("inc-renovation", "Renovation", "পুনর্নির্মাণ"),
            ("inc-maintenance", "Maintenance", "রক্ষণাবেক্ষণ"),
        ),
    ),
    ExpenseCategory(
        id="service-income",
        name="Service Income",
        name_bn="সেবা আয়",
        icon="tool",
        color="#2196F3",
        description="Income from services",
        subcategories=_subs(
            ("inc-consulting", "Consulting", "পরামর্শ"),
            ("inc-design", "Design Services", "ডিজাইন সেবা"),
            ("inc-supervision", "Supervision", "তদারকি"),
            ("inc-rental", "Equipment Rental", "যন্ত্রপাতি ভাড়া"),
        ),
    ),
    ExpenseCategory(
        id="other-income",
        name="Other Income",
        name_bn="অন্যান্য আয়",
        icon="plus-circle",
        color="#FF9800",
        description="Other sources of income",
        subcategories=_subs(
            ("inc-interest", "Interest Income", "সুদ আয়"),
            ("inc-dividend", "Dividend", "লভ্যাংশ"),
            ("inc-sale", "Asset Sale", "সম্পদ বিক্রয়"),
            ("inc-refund", "Refunds", "ফেরত"),
            ("inc-other", "Miscellaneous", "বিবিধ"),
        ),
    ),
)

CATEGORY_COLORS: dict[str, str] = {
    cat.id: cat.color for cat in EXPENSE_CATEGORIES + INCOME_CATEGORIES
}

QUICK_EXPENSES: tuple[QuickExpense, ...] = (
    QuickExpense(category_id="materials", subcategory_id="mat-cement", description="Cement Purchase", description_bn="সিমেন্ট ক্রয়", default_amount=5200),
    QuickExpense(category_id="materials", subcategory_id="mat-steel", description="Steel Rods", description_bn="স্টিল রড", default_amount=9500),
    QuickExpense(category_id="materials", subcategory_id="mat-bricks", description="Bricks", description_bn="ইট", default_amount=1200),
    QuickExpense(category_id="labor", subcategory_id="lab-mason", description="Mason Wages", description_bn="রাজমিস্ত্রির মজুরি", default_amount=1200),
    QuickExpense(category_id="labor", subcategory_id="lab-helper", description="Helper Wages", description_bn="সহকারীর মজুরি", default_amount=700),
    QuickExpense(category_id="utilities", subcategory_id="utl-electricity", description="Electricity Bill", description_bn="বিদ্যুৎ বিল", default_amount=5000),
    QuickExpense(category_id="utilities", subcategory_id="utl-water", description="Water Bill", description_bn="পানির বিল", default_amount=1500),
    QuickExpense(category_id="equipment", subcategory_id="eqp-rental", description="Equipment Rental", description_bn="যন্ত্রপাতি ভাড়া", default_amount=5000),
    QuickExpense(category_id="equipment", subcategory_id="eqp-transport", description="Transportation", description_bn="পরিবহন", default_amount=3000),
    QuickExpense(category_id="taxes", subcategory_id="tax-vat", description="VAT Payment", description_bn="ভ্যাট পরিশোধ", default_amount=15000),
)


def get_category(category_id: str) -> Optional[ExpenseCategory]:
    """Look up an expense or income category by id."""
    for category in EXPENSE_CATEGORIES + INCOME_CATEGORIES:
        if category.id == category_id:
            return category
    return None


def get_subcategory(category_id: str, subcategory_id: str) -> Optional[SubCategory]:
    category = get_category(category_id)
    if category is None:
        return None
    for sub in category.subcategories:
        if sub.id == subcategory_id:
            return sub
    return None


def get_all_categories() -> list[CategoryRef]:
    """All categories as a flat list, expense categories first."""
    expense = [
        CategoryRef(id=c.id, name=c.name, name_bn=c.name_bn, type="expense")
        for c in EXPENSE_CATEGORIES
    ]
    income = [
        CategoryRef(id=c.id, name=c.name, name_bn=c.name_bn, type="income")
        for c in INCOME_CATEGORIES
    ]
    return expense + income
