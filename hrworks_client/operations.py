"""
HRworks API operations.

Each operation names its target and shapes the caller's parameters into the
JSON payload. Parameters passed as None are left out of the payload.
"""

from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from .exceptions import UnknownOperationError
from .request import Request


class Operation(NamedTuple):
    """Target name plus the builder that turns parameters into a payload."""

    target: str
    build: Callable[..., Dict[str, Any]]


def _as_list(values: Optional[Iterable[str]]) -> Optional[List[str]]:
    """Turn an iterable of identifiers into a list; a single string becomes [value]."""
    if values is None:
        return None
    if isinstance(values, str):
        return [values]
    return list(values)


def _persons_payload(organization_units: Optional[Iterable[str]] = None,
                     only_active: Optional[bool] = None) -> Dict[str, Any]:
    return {
        "organizationUnits": _as_list(organization_units),
        "onlyActive": only_active,
    }


def _person_master_data_payload(persons: Optional[Iterable[str]] = (),
                                use_personnel_numbers: Optional[bool] = False) -> Dict[str, Any]:
    return {
        "persons": _as_list(persons),
        "usePersonnelNumbers": use_personnel_numbers,
    }


GET_PERSONS = Operation("GetPersons", _persons_payload)
GET_PERSON_MASTER_DATA = Operation("GetPersonMasterData", _person_master_data_payload)

OPERATIONS = {
    operation.target: operation
    for operation in (GET_PERSONS, GET_PERSON_MASTER_DATA)
}


def build_request(target: str, **params) -> Request:
    """
    Build a request for a registered operation.

    Args:
        target: Operation name, e.g. "GetPersons"
        **params: Parameters accepted by the operation's payload builder

    Returns:
        Request ready to be passed to HRworksClient.send()

    Raises:
        UnknownOperationError: If no operation is registered for target
    """
    try:
        operation = OPERATIONS[target]
    except KeyError:
        raise UnknownOperationError(f"Unknown operation: {target}") from None
    return Request(operation.target, operation.build(**params))


def get_persons(organization_units: Optional[Iterable[str]] = None,
                only_active: Optional[bool] = None) -> Request:
    """
    List all persons in the company, or in the given organization units.

    By default the API only returns active persons, i.e. persons that were
    neither deleted nor have left the company.
    """
    return build_request(GET_PERSONS.target,
                         organization_units=organization_units,
                         only_active=only_active)


def get_person_master_data(persons: Optional[Iterable[str]] = (),
                           use_personnel_numbers: Optional[bool] = False) -> Request:
    """Return the current master data of the given persons."""
    return build_request(GET_PERSON_MASTER_DATA.target,
                         persons=persons,
                         use_personnel_numbers=use_personnel_numbers)
