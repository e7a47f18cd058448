"""Application services: pure calculations over stored field maps.

Booking aggregation and ledger edits, offer pricing and conversion, finance
records, commission, catalog pricing and photo path repair. No I/O here;
use cases load and save documents around these functions.
"""
