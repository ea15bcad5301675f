"""
Camper identity keys.

Enrollment rows and activity rows share no primary key. Both importers derive
the same key from first name, last name and grade so a camper's enrollment
record and their per-round activity rows resolve to one identity. Two real
campers with the same first name, last name and grade are indistinguishable.
"""

from collections.abc import Mapping

from .roster_header import RosterHeader, RosterKind


def _field_names(kind: RosterKind) -> tuple[str, str, str]:
    if kind == RosterKind.ACTIVITY:
        return (
            RosterHeader.FIRST_NAME.activity_roster_name,
            RosterHeader.LAST_NAME.activity_roster_name,
            RosterHeader.GRADE.activity_roster_name,
        )
    return (
        RosterHeader.FIRST_NAME.camper_roster_name,
        RosterHeader.LAST_NAME.camper_roster_name,
        RosterHeader.GRADE.camper_roster_name,
    )


def generate_camper_id(
    camper_data: Mapping[str, str | None],
    kind: RosterKind = RosterKind.ENROLLMENT,
) -> str:
    """
    Build the identity key for a row.

    Args:
        camper_data: Row payload
        kind: Which schema's field names to read (enrollment or activity)

    Returns:
        "first_last_grade", lower-cased, spaces replaced with underscores.
        Missing fields count as empty strings, so an empty payload yields "__".

    Examples:
        >>> generate_camper_id({"First Name": "Mary Ann", "Last Name": "Smith Jones", "Camp Grade": "8"})
        'mary_ann_smith_jones_8'
    """
    first_field, last_field, grade_field = _field_names(kind)
    first_name = camper_data.get(first_field) or ""
    last_name = camper_data.get(last_field) or ""
    grade = camper_data.get(grade_field) or ""
    return f"{first_name}_{last_name}_{grade}".lower().replace(" ", "_")


def generate_camper_id_from_activity(activity_data: Mapping[str, str | None]) -> str:
    return generate_camper_id(activity_data, RosterKind.ACTIVITY)
