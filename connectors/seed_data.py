"""
Seed Data for the in-memory store.

Sample herd, tasks, finances and reference records used in demo mode (no
remote store configured) and by the test suite. Rows use the remote table
column names so they pass through the same boundary parsing as live rows.
"""

from copy import deepcopy
from typing import Any, Dict, List


# =============================================================================
# LIVESTOCK
# =============================================================================

LIVESTOCK: List[Dict[str, Any]] = [
    {"id": "LV1001", "name": "Bella", "breed": "Angus", "gender": "Female", "age": "3 years",
     "weight": "550 kg", "health_status": "healthy", "birth_date": "2021-03-15",
     "purchase_date": "2021-06-20", "purchase_price": "$1,200",
     "notes": "Excellent milk producer. First calf born in spring 2023."},
    {"id": "LV1002", "name": "Duke", "breed": "Hereford", "gender": "Male", "age": "4 years",
     "weight": "850 kg", "health_status": "healthy", "birth_date": "2020-02-10",
     "purchase_date": "2020-05-15", "purchase_price": "$1,500",
     "notes": "Primary breeding bull. Excellent genetics."},
    {"id": "LV1003", "name": "Daisy", "breed": "Holstein", "gender": "Female", "age": "2 years",
     "weight": "450 kg", "health_status": "attention", "birth_date": "2022-05-22",
     "purchase_date": "2022-08-10", "purchase_price": "$900",
     "notes": "Recently showing signs of reduced appetite. Under observation."},
    {"id": "LV1004", "name": "Rocky", "breed": "Brahman", "gender": "Male", "age": "5 years",
     "weight": "920 kg", "health_status": "healthy", "birth_date": "2019-01-05",
     "purchase_date": "2019-06-30", "purchase_price": "$1,800",
     "notes": "Secondary breeding bull. Heat-resistant."},
    {"id": "LV1005", "name": "Rosie", "breed": "Jersey", "gender": "Female", "age": "3 years",
     "weight": "420 kg", "health_status": "sick", "birth_date": "2021-07-12",
     "purchase_date": "2021-10-05", "purchase_price": "$950",
     "notes": "Currently on antibiotics for respiratory infection."},
    {"id": "LV1006", "name": "Bruno", "breed": "Charolais", "gender": "Male", "age": "2 years",
     "weight": "680 kg", "health_status": "healthy", "birth_date": "2022-02-18",
     "purchase_date": "2022-05-30", "purchase_price": "$1,350",
     "notes": "Fast growing. Potential for beef production."},
]


# =============================================================================
# TASKS
# =============================================================================

TASKS: List[Dict[str, Any]] = [
    {"id": "T001", "title": "Feed new calves", "description": "Special nutrition mix for the new calves",
     "category": "feeding", "due_date": "2023-11-15", "completed": False, "priority": "high"},
    {"id": "T002", "title": "Vaccination for herd", "description": "Annual vaccination for the entire herd",
     "category": "health", "due_date": "2023-11-20", "completed": False, "priority": "high"},
    {"id": "T003", "title": "Monitor heat cycles", "description": "Check for signs of heat in breeding stock",
     "category": "breeding", "due_date": "2023-11-10", "completed": False, "priority": "medium",
     "animal_id": "LV1003"},
    {"id": "T004", "title": "Repair north fence", "description": "Fix the damaged section of the north pasture fence",
     "category": "general", "due_date": "2023-11-25", "completed": False, "priority": "medium"},
    {"id": "T005", "title": "Schedule vet visit", "description": "Routine checkup for pregnant cows",
     "category": "health", "due_date": "2023-11-18", "completed": True, "priority": "high"},
]


# =============================================================================
# FINANCIAL TRANSACTIONS
# =============================================================================

FINANCIAL_TRANSACTIONS: List[Dict[str, Any]] = [
    {"id": "F001", "date": "2023-11-05", "description": "Feed Purchase - Premium Feed Co.",
     "category": "Feed", "amount": -1250.00, "payment_method": "Bank Transfer", "status": "completed"},
    {"id": "F002", "date": "2023-11-10", "description": "Milk Sales - Valley Dairy Processor",
     "category": "Sales", "amount": 3200.00, "payment_method": "Check", "status": "completed"},
    {"id": "F003", "date": "2023-11-15", "description": "Veterinary Services - Dr. Johnson",
     "category": "Medical", "amount": -450.00, "payment_method": "Credit Card", "status": "completed"},
    {"id": "F004", "date": "2023-11-20", "description": "Cattle Sale - 2 Heads",
     "category": "Sales", "amount": 2800.00, "payment_method": "Bank Transfer", "status": "completed"},
    {"id": "F005", "date": "2023-11-25", "description": "Equipment Maintenance",
     "category": "Equipment", "amount": -350.00, "payment_method": "Credit Card", "status": "completed"},
    {"id": "F006", "date": "2023-11-28", "description": "Farm Insurance Payment",
     "category": "Insurance", "amount": -520.00, "payment_method": "Direct Debit", "status": "completed"},
    {"id": "F007", "date": "2023-12-01", "description": "Staff Wages",
     "category": "Labor", "amount": -1800.00, "payment_method": "Bank Transfer", "status": "pending"},
]


# =============================================================================
# HEALTH
# =============================================================================

HEALTH_RECORDS: List[Dict[str, Any]] = [
    {"id": "HR001", "animal_id": "LV1001", "animal_name": "Bella", "type": "Vaccination",
     "date": "2023-10-15", "description": "Annual vaccination against blackleg", "performed_by": "Dr. Smith"},
    {"id": "HR002", "animal_id": "LV1003", "animal_name": "Daisy", "type": "Treatment",
     "date": "2023-11-02", "description": "Treatment for mild respiratory infection", "performed_by": "Dr. Johnson"},
    {"id": "HR003", "animal_id": "LV1005", "animal_name": "Rosie", "type": "Examination",
     "date": "2023-11-10", "description": "General health examination, signs of fatigue",
     "performed_by": "Dr. Martinez"},
    {"id": "HR004", "animal_id": "LV1002", "animal_name": "Duke", "type": "Vaccination",
     "date": "2023-09-28", "description": "Vaccination against BVD", "performed_by": "Dr. Smith"},
]

VACCINATION_SCHEDULES: List[Dict[str, Any]] = [
    {"id": "VS001", "animal_ids": ["LV1001", "LV1004", "LV1006"], "animal_count": 3,
     "vaccine_name": "Blackleg Vaccine", "due_date": "2023-12-15", "status": "upcoming"},
    {"id": "VS002", "animal_ids": ["LV1002", "LV1003"], "animal_count": 2,
     "vaccine_name": "BVD Vaccine", "due_date": "2023-12-10", "status": "upcoming"},
    {"id": "VS003", "animal_ids": ["LV1005"], "animal_count": 1,
     "vaccine_name": "Respiratory Vaccine", "due_date": "2023-11-05", "status": "overdue"},
]


# =============================================================================
# FEEDING
# =============================================================================

FEEDING_SCHEDULES: List[Dict[str, Any]] = [
    {"id": "FS001", "name": "Morning Feed - Dairy Group", "feed_type": "Hay and Grain Mix",
     "animal_group": "Dairy Cows", "quantity": "250 kg", "time": "06:00 AM", "frequency": "Daily",
     "assignee": "John Smith", "status": "active"},
    {"id": "FS002", "name": "Evening Feed - Dairy Group", "feed_type": "Silage and Mineral Supplement",
     "animal_group": "Dairy Cows", "quantity": "200 kg", "time": "05:00 PM", "frequency": "Daily",
     "assignee": "Maria Rodriguez", "status": "active"},
    {"id": "FS003", "name": "Morning Feed - Beef Group", "feed_type": "Grain and Protein Mix",
     "animal_group": "Beef Cattle", "quantity": "180 kg", "time": "07:00 AM", "frequency": "Daily",
     "assignee": "Michael Johnson", "status": "active"},
    {"id": "FS004", "name": "Special Supplement - Calves", "feed_type": "Calf Starter and Milk Replacer",
     "animal_group": "Calves", "quantity": "50 kg", "time": "08:00 AM", "frequency": "Daily",
     "assignee": "Sarah Williams", "status": "active"},
    {"id": "FS005", "name": "Winter Feed Program", "feed_type": "High-Energy Feed Mix",
     "animal_group": "All Cattle", "quantity": "300 kg", "time": "Various", "frequency": "Seasonal",
     "assignee": "David Wilson", "status": "inactive"},
]

FEED_INVENTORY: List[Dict[str, Any]] = [
    {"id": "FI001", "name": "Alfalfa Hay", "category": "Forage", "quantity_available": "5,000 kg",
     "unit": "kg", "last_purchase": "2023-10-15", "supplier": "Green Valley Farms",
     "cost": "$0.15/kg", "status": "In Stock"},
    {"id": "FI002", "name": "Corn Silage", "category": "Forage", "quantity_available": "8,200 kg",
     "unit": "kg", "last_purchase": "2023-11-02", "supplier": "Harvest Solutions",
     "cost": "$0.10/kg", "status": "In Stock"},
    {"id": "FI003", "name": "Grain Mix", "category": "Concentrate", "quantity_available": "2,800 kg",
     "unit": "kg", "last_purchase": "2023-12-10", "supplier": "Premium Feed Co.",
     "cost": "$0.40/kg", "status": "Low Stock"},
    {"id": "FI004", "name": "Mineral Supplement", "category": "Supplement", "quantity_available": "500 kg",
     "unit": "kg", "last_purchase": "2024-01-05", "supplier": "Animal Nutrition Inc.",
     "cost": "$1.25/kg", "status": "In Stock"},
    {"id": "FI005", "name": "Protein Pellets", "category": "Supplement", "quantity_available": "350 kg",
     "unit": "kg", "last_purchase": "2024-01-15", "supplier": "Premium Feed Co.",
     "cost": "$0.75/kg", "status": "Low Stock"},
]


SEED_ROWS: Dict[str, List[Dict[str, Any]]] = {
    "livestock": LIVESTOCK,
    "tasks": TASKS,
    "financial_transactions": FINANCIAL_TRANSACTIONS,
    "health_records": HEALTH_RECORDS,
    "vaccination_schedules": VACCINATION_SCHEDULES,
    "feeding_schedules": FEEDING_SCHEDULES,
    "feed_inventory": FEED_INVENTORY,
}


def get_seed_rows(table: str) -> List[Dict[str, Any]]:
    """Fresh copy of the seed rows for `table` (empty for unknown tables)."""
    return deepcopy(SEED_ROWS.get(table, []))
