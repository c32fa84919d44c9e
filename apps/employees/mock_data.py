"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock staff records: salaried employees and daily-rated
             contract workers. IDs match the employee_id and
             contract_worker_id carried by payroll records.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class Department(models.TextChoices):
    TECHNICAL = 'Technical', _('Technical')
    ADMINISTRATION = 'Administration', _('Administration')
    SALES = 'Sales', _('Sales')
    FINANCE = 'Finance', _('Finance')
    HR = 'HR', _('HR')


class EmployeeStatus(models.TextChoices):
    ACTIVE = 'Active', _('Active')
    ON_LEAVE = 'On Leave', _('On Leave')
    TERMINATED = 'Terminated', _('Terminated')


class Skill(models.TextChoices):
    ELECTRICIAN = 'Electrician', _('Electrician')
    WELDER = 'Welder', _('Welder')
    FITTER = 'Fitter', _('Fitter')
    HELPER = 'Helper', _('Helper')
    TECHNICIAN = 'Technician', _('Technician')


class WorkerStatus(models.TextChoices):
    AVAILABLE = 'Available', _('Available')
    ASSIGNED = 'Assigned', _('Assigned')
    INACTIVE = 'Inactive', _('Inactive')


@dataclass
class Employee:
    id: int
    name: str
    employee_code: str
    email: str
    department: str
    role: str
    joining_date: date
    salary: Decimal
    status: str = EmployeeStatus.ACTIVE
    phone: str = ''
    address: str = ''
    emergency_contact: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.employee_code})"


@dataclass
class ContractWorker:
    id: int
    name: str
    worker_code: str
    phone: str
    skill: str
    daily_rate: Decimal
    status: str = WorkerStatus.AVAILABLE
    assigned_to: str = ''
    address: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.worker_code})"


def _seed_employees() -> List[Employee]:
    rows = [
        (101, 'Rajesh Kumar', 'EMP-001', 'rajesh@electrocom.in', '+91 98765 43210', Department.TECHNICAL,
         'Senior Engineer', '2020-01-15', EmployeeStatus.ACTIVE, 35000, 'Mumbai, Maharashtra',
         '+91 98765 43211'),
        (102, 'Priya Sharma', 'EMP-002', 'priya@electrocom.in', '+91 98765 43220', Department.ADMINISTRATION,
         'Office Manager', '2021-03-20', EmployeeStatus.ACTIVE, 28000, 'Mumbai, Maharashtra', ''),
        (103, 'Amit Patel', 'EMP-003', 'amit@electrocom.in', '+91 98765 43230', Department.TECHNICAL,
         'Field Technician', '2019-06-10', EmployeeStatus.ACTIVE, 42000, 'Pune, Maharashtra', ''),
        (104, 'Anita Desai', 'EMP-004', 'anita@electrocom.in', '+91 98765 43250', Department.FINANCE,
         'Accountant', '2022-07-01', EmployeeStatus.ACTIVE, 32000, 'Thane, Maharashtra', ''),
        (105, 'Deepak Verma', 'EMP-005', 'deepak@electrocom.in', '+91 98765 43260', Department.TECHNICAL,
         'Site Supervisor', '2018-11-12', EmployeeStatus.ACTIVE, 38000, 'Navi Mumbai, Maharashtra', ''),
        (106, 'Suresh Reddy', 'EMP-006', 'suresh@electrocom.in', '+91 98765 43240', Department.SALES,
         'Sales Executive', '2022-01-05', EmployeeStatus.ON_LEAVE, 32000, 'Bangalore, Karnataka', ''),
    ]
    return [
        Employee(
            id=pk, name=name, employee_code=code, email=email, phone=phone,
            department=department, role=role, joining_date=day(joined), status=status,
            salary=Decimal(salary), address=address, emergency_contact=emergency,
            created_at=stamp(f"{joined}T00:00:00Z"), updated_at=stamp(f"{joined}T00:00:00Z"),
        )
        for pk, name, code, email, phone, department, role, joined, status, salary, address, emergency in rows
    ]


def _seed_workers() -> List[ContractWorker]:
    rows = [
        (201, 'Ramesh Singh', 'CW-001', '+91 98765 10101', Skill.HELPER, 700, WorkerStatus.ASSIGNED,
         'Metro Mall Services', 'Kurla, Mumbai', '2025-02-01T00:00:00Z'),
        (202, 'Sunil Yadav', 'CW-002', '+91 98765 20202', Skill.ELECTRICIAN, 850, WorkerStatus.AVAILABLE,
         '', 'Ghatkopar, Mumbai', '2025-02-10T00:00:00Z'),
        (203, 'Manoj Kumar', 'CW-003', '+91 98765 30303', Skill.FITTER, 770, WorkerStatus.AVAILABLE,
         '', 'Vashi, Navi Mumbai', '2025-03-01T00:00:00Z'),
        (204, 'Ram Prakash', 'CW-004', '+91 98765 11111', Skill.ELECTRICIAN, 800, WorkerStatus.AVAILABLE,
         '', 'Andheri, Mumbai', '2025-01-01T00:00:00Z'),
        (205, 'Vikram Singh', 'CW-005', '+91 98765 22222', Skill.WELDER, 900, WorkerStatus.ASSIGNED,
         'BSNL Network Expansion', 'Thane, Mumbai', '2025-01-05T00:00:00Z'),
    ]
    return [
        ContractWorker(
            id=pk, name=name, worker_code=code, phone=phone, skill=skill,
            daily_rate=Decimal(rate), status=status, assigned_to=assigned_to, address=address,
            created_at=stamp(created), updated_at=stamp(created),
        )
        for pk, name, code, phone, skill, rate, status, assigned_to, address, created in rows
    ]


employees: MockRepository[Employee] = MockRepository('Employee', Employee, _seed_employees)
contract_workers: MockRepository[ContractWorker] = MockRepository(
    'Contract worker', ContractWorker, _seed_workers
)


def get_employee_by_id(pk: Optional[int]) -> Optional[Employee]:
    return employees.get_by_id(pk) if pk is not None else None


def get_contract_worker_by_id(pk: Optional[int]) -> Optional[ContractWorker]:
    return contract_workers.get_by_id(pk) if pk is not None else None


def get_employee_name(pk: Optional[int]) -> str:
    employee = get_employee_by_id(pk)
    return employee.name if employee else ''
