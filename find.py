# find.py
from database import USERS, serialize


def find_donors(db, blood_group=None, district=None, upazila=None):
    """Return every donor matching the given blood group and location (unpaginated)."""
    query = {"role": "donor"}
    if blood_group:
        query["bloodGroup"] = blood_group
    if district:
        query["district"] = district
    if upazila:
        query["upazila"] = upazila

    return [serialize(d) for d in db[USERS].find(query)]
