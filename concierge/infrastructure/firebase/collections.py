"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent with the ones the web client reads and writes.

Every business document carries a companyId field; repositories always
filter on it.
"""

COLLECTION_COMPANIES = "companies"

# Clients and bookings
COLLECTION_CLIENTS = "clients"
COLLECTION_RESERVATIONS = "reservations"
COLLECTION_OFFERS = "offers"
COLLECTION_COLLABORATORS = "collaborators"

# Catalog: generic services plus dedicated per-category collections
COLLECTION_SERVICES = "services"
COLLECTION_VILLAS = "villas"
COLLECTION_BOATS = "boats"
COLLECTION_CARS = "cars"
COLLECTION_CHEFS = "chefs"
COLLECTION_SECURITY = "security"

# Finance
COLLECTION_FINANCE_RECORDS = "financeRecords"
COLLECTION_CATEGORY_PAYMENTS = "categoryPayments"
COLLECTION_EXPENSES = "expenses"

# Dedicated catalog collection per category (category id == collection name).
CATEGORY_COLLECTIONS = {
    "villas": COLLECTION_VILLAS,
    "boats": COLLECTION_BOATS,
    "cars": COLLECTION_CARS,
    "chefs": COLLECTION_CHEFS,
    "security": COLLECTION_SECURITY,
}
