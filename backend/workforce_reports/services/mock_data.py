"""
Built-in demo dataset served by the default record store.

Shapes mirror the dashboard's mock JSON feeds: contractors keyed by ``Id``,
timesheet entries keyed by ``contractorId``, and the pre-aggregated
``reports`` snapshot.
"""
from typing import Any, Dict, List


def contractors() -> List[Dict[str, Any]]:
    return [
        {"Id": 1, "name": "Sarah Chen", "department": "Technology", "status": "active",
         "hourlyRate": 125, "monthlyCost": 20000, "daysRemaining": 142},
        {"Id": 2, "name": "Marcus Johnson", "department": "Technology", "status": "active",
         "hourlyRate": 110, "monthlyCost": 17600, "daysRemaining": 21},
        {"Id": 3, "name": "Priya Patel", "department": "Risk Management", "status": "active",
         "hourlyRate": 95, "monthlyCost": 15200, "daysRemaining": 58},
        {"Id": 4, "name": "David Okafor", "department": "Operations", "status": "active",
         "hourlyRate": 80, "monthlyCost": 12800, "daysRemaining": 200},
        {"Id": 5, "name": "Elena Rossi", "department": "Finance", "status": "inactive",
         "hourlyRate": 90, "monthlyCost": 0, "daysRemaining": 0},
        {"Id": 6, "name": "James Whitfield", "department": "Compliance", "status": "active",
         "hourlyRate": 85, "monthlyCost": 13600, "daysRemaining": 12},
        {"Id": 7, "name": "Aisha Rahman", "department": "Analytics", "status": "active",
         "hourlyRate": 105, "monthlyCost": 16800, "daysRemaining": 95},
        {"Id": 8, "name": "Tomás García", "department": "Technology", "status": "pending",
         "hourlyRate": 115, "daysRemaining": 180},
        {"Id": 9, "name": "Hannah Lee", "department": "Finance", "status": "active",
         "hourlyRate": 92, "monthlyCost": 14720, "daysRemaining": 45},
        {"Id": 10, "name": "Robert Kim", "department": "Operations", "status": "inactive",
         "hourlyRate": 78},
        {"Id": 11, "name": "Olivia Brown", "department": "Risk Management", "status": "active",
         "hourlyRate": 100, "monthlyCost": 16000, "daysRemaining": 310},
        {"Id": 12, "name": "Samuel Adeyemi", "department": "Marketing", "status": "active",
         "hourlyRate": 70, "monthlyCost": 11200, "daysRemaining": 27},
    ]


def timesheets() -> List[Dict[str, Any]]:
    return [
        {"contractorId": 1, "hoursWorked": 168, "projectsCompleted": 7, "efficiency": 94},
        {"contractorId": 2, "hoursWorked": 152, "projectsCompleted": 6, "efficiency": 88},
        {"contractorId": 3, "hoursWorked": 160, "projectsCompleted": 5, "efficiency": 81},
        {"contractorId": 4, "hoursWorked": 176, "projectsCompleted": 4, "efficiency": 72},
        {"contractorId": 6, "hoursWorked": 144, "projectsCompleted": 6, "efficiency": 91},
        {"contractorId": 7, "hoursWorked": 160, "projectsCompleted": 8, "efficiency": 96},
        {"contractorId": 9, "hoursWorked": 136, "projectsCompleted": 5, "efficiency": 79},
        {"contractorId": 11, "hoursWorked": 164, "projectsCompleted": 6, "efficiency": 85},
    ]


def reports() -> Dict[str, Any]:
    return {
        "totalContractors": 12,
        "activeDepartments": 7,
        "monthlySpend": 487500,
        "avgContractLength": 180,
        "departmentBreakdown": [
            {"department": "Technology", "spend": 198000, "contractors": 3},
            {"department": "Risk Management", "spend": 97500, "contractors": 2},
            {"department": "Operations", "spend": 62000, "contractors": 2},
            {"department": "Finance", "spend": 54000, "contractors": 2},
            {"department": "Compliance", "spend": 41000, "contractors": 1},
            {"department": "Analytics", "spend": 35000, "contractors": 1},
        ],
        "monthlyTrends": [
            {"month": "Sep 2023", "spend": 452000},
            {"month": "Oct 2023", "spend": 468000},
            {"month": "Nov 2023", "spend": 471500},
            {"month": "Dec 2023", "spend": 439000},
            {"month": "Jan 2024", "spend": 476000},
            {"month": "Feb 2024", "spend": 487500},
        ],
    }
