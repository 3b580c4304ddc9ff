"""infofinder: identifier lookups across public record services.

This package validates identifiers (mobile numbers, Aadhaar numbers, vehicle
plates, family identifiers, IFSC codes), queries the matching lookup service,
and normalizes the loosely-shaped replies into display sections.
"""
