"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock client master data.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from apps.core.repository import MockRepository, stamp


@dataclass
class Client:
    id: int
    name: str
    address: str
    city: str
    state: str
    pin_code: str
    primary_contact_name: str
    primary_contact_email: str
    primary_contact_phone: str
    business_name: str = ''
    country: str = 'India'
    secondary_contact: str = ''
    notes: str = ''
    tags: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return self.name


def _seed_clients() -> List[Client]:
    return [
        Client(
            id=1,
            name='ABC Power Solutions Ltd',
            business_name='ABC Power',
            address='123 Industrial Area, Sector 45',
            city='Mumbai',
            state='Maharashtra',
            pin_code='400001',
            primary_contact_name='Rajesh Kumar',
            primary_contact_email='rajesh@abcpower.com',
            primary_contact_phone='9876543210',
            secondary_contact='9123456789',
            notes='Premium client with multiple AMCs',
            tags=['premium', 'long-term'],
            created_at=stamp('2023-01-15T00:00:00Z'),
            updated_at=stamp('2025-10-30T10:30:00Z'),
        ),
        Client(
            id=2,
            name='XYZ Industries',
            address='456 Tech Park, Phase 2',
            city='Pune',
            state='Maharashtra',
            pin_code='411001',
            primary_contact_name='Priya Sharma',
            primary_contact_email='priya@xyzind.com',
            primary_contact_phone='9765432109',
            tags=['industrial', 'regular'],
            created_at=stamp('2023-06-20T00:00:00Z'),
            updated_at=stamp('2025-10-28T14:20:00Z'),
        ),
        Client(
            id=3,
            name='TechCorp Solutions',
            business_name='TechCorp IT Services',
            address='789 Software City, Building A',
            city='Bangalore',
            state='Karnataka',
            pin_code='560001',
            primary_contact_name='Amit Patel',
            primary_contact_email='amit@techcorp.com',
            primary_contact_phone='9654321098',
            secondary_contact='amit.p@techcorp.com',
            notes='IT infrastructure maintenance contracts',
            tags=['tech', 'corporate'],
            created_at=stamp('2024-02-10T00:00:00Z'),
            updated_at=stamp('2025-11-01T09:15:00Z'),
        ),
        Client(
            id=4,
            name='Metro Mall Services',
            address='Metro Plaza, MG Road',
            city='Delhi',
            state='Delhi',
            pin_code='110001',
            primary_contact_name='Sunita Verma',
            primary_contact_email='sunita@metromall.com',
            primary_contact_phone='9543210987',
            tags=['retail', 'commercial'],
            created_at=stamp('2024-08-05T00:00:00Z'),
            updated_at=stamp('2025-10-25T16:45:00Z'),
        ),
    ]


clients: MockRepository[Client] = MockRepository('Client', Client, _seed_clients)


def get_client_by_id(pk: int) -> Optional[Client]:
    return clients.get_by_id(pk)


def get_client_name(pk: int) -> str:
    client = clients.get_by_id(pk)
    return client.name if client else 'Unknown Client'
