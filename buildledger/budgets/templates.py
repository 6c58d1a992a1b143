"""Starter budgets for common building projects (BDT estimates)."""

from datetime import date
from typing import Optional, Union

from buildledger.budgets.planner import apply_items, create_budget
from buildledger.models.base import ReferenceModel
from buildledger.models.budget import Budget, BudgetItemInput


class BudgetTemplate(ReferenceModel):
    id: str
    name: str
    name_bn: str
    description: str
    description_bn: str
    default_items: tuple[BudgetItemInput, ...]


def _items(*rows: tuple[str, str, str, float]) -> tuple[BudgetItemInput, ...]:
    return tuple(
        BudgetItemInput(
            category_id=category_id,
            subcategory_id=subcategory_id,
            description=description,
            estimated_amount=amount,
        )
        for category_id, subcategory_id, description, amount in rows
    )


BUDGET_TEMPLATES: tuple[BudgetTemplate, ...] = (
    BudgetTemplate(
        id="residential-1200",
        name="Residential (1200 sqft)",
        name_bn="আবাসিক (১২০০ বর্গফুট)",
        description="Standard 3-bedroom residential building",
        description_bn="স্ট্যান্ডার্ড ৩ বেডরুম আবাসিক ভবন",
        default_items=_items(
            ("materials", "mat-cement", "Cement (400 bags)", 208000),
            ("materials", "mat-steel", "Steel Rods (3000 kg)", 285000),
            ("materials", "mat-bricks", "Bricks (25000 pcs)", 300000),
            ("materials", "mat-sand", "Sand & Aggregates", 150000),
            ("labor", "lab-mason", "Masonry Work", 180000),
            ("labor", "lab-helper", "Helper Labor", 80000),
            ("utilities", "utl-electricity", "Electrical Work", 120000),
            ("utilities", "utl-water", "Plumbing Work", 100000),
            ("materials", "mat-tiles", "Tiles & Flooring", 150000),
            ("materials", "mat-paint", "Painting Work", 80000),
        ),
    ),
    BudgetTemplate(
        id="residential-2000",
        name="Residential (2000 sqft)",
        name_bn="আবাসিক (২০০০ বর্গফুট)",
        description="Large 4-bedroom residential building",
        description_bn="বড় ৪ বেডরুম আবাসিক ভবন",
        default_items=_items(
            ("materials", "mat-cement", "Cement (700 bags)", 364000),
            ("materials", "mat-steel", "Steel Rods (5000 kg)", 475000),
            ("materials", "mat-bricks", "Bricks (40000 pcs)", 480000),
            ("materials", "mat-sand", "Sand & Aggregates", 250000),
            ("labor", "lab-mason", "Masonry Work", 300000),
            ("labor", "lab-helper", "Helper Labor", 150000),
            ("utilities", "utl-electricity", "Electrical Work", 200000),
            ("utilities", "utl-water", "Plumbing Work", 180000),
            ("materials", "mat-tiles", "Tiles & Flooring", 280000),
            ("materials", "mat-paint", "Painting Work", 150000),
        ),
    ),
    BudgetTemplate(
        id="commercial-3000",
        name="Commercial (3000 sqft)",
        name_bn="বাণিজ্যিক (৩০০০ বর্গফুট)",
        description="Commercial office space",
        description_bn="বাণিজ্যিক অফিস স্পেস",
        default_items=_items(
            ("materials", "mat-cement", "Cement (1000 bags)", 520000),
            ("materials", "mat-steel", "Steel Rods (8000 kg)", 760000),
            ("materials", "mat-bricks", "Bricks (60000 pcs)", 720000),
            ("materials", "mat-glass", "Glass & Aluminum", 400000),
            ("labor", "lab-mason", "Masonry Work", 450000),
            ("utilities", "utl-electricity", "Electrical Work", 350000),
            ("utilities", "utl-water", "Plumbing Work", 250000),
            ("materials", "mat-tiles", "Flooring", 450000),
            ("consulting", "prof-architect", "Architect Fees", 200000),
            ("permits", "perm-building", "Permits & Fees", 150000),
        ),
    ),
    BudgetTemplate(
        id="renovation-standard",
        name="Standard Renovation",
        name_bn="স্ট্যান্ডার্ড পুনর্নির্মাণ",
        description="Basic renovation package",
        description_bn="বেসিক পুনর্নির্মাণ প্যাকেজ",
        default_items=_items(
            ("materials", "mat-tiles", "Tile Replacement", 80000),
            ("labor", "lab-painter", "Painting Work", 50000),
            ("utilities", "utl-electricity", "Electrical Updates", 40000),
            ("utilities", "utl-water", "Plumbing Fixes", 30000),
            ("materials", "mat-paint", "Paint & Materials", 35000),
        ),
    ),
)


def get_budget_template(template_id: str) -> Optional[BudgetTemplate]:
    for template in BUDGET_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def create_budget_from_template(
    template_id: str,
    project_name: str,
    *,
    currency: Optional[str] = None,
    start_date: Optional[Union[str, date]] = None,
    end_date: Optional[Union[str, date]] = None,
) -> Optional[Budget]:
    """A draft budget holding the template's lines, or None for an unknown id."""
    template = get_budget_template(template_id)
    if template is None:
        return None

    budget = create_budget(
        template.name,
        project_name,
        name_bn=template.name_bn,
        description=template.description,
        currency=currency,
        start_date=start_date,
        end_date=end_date,
    )
    return apply_items(budget, template.default_items)
