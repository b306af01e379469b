"""Collapse nested identifiers to a bare filename for flat local layouts."""

from shared.log import create_logger

_, _, _, log_warn, _ = create_logger("Naming")


def flatten_identifier(identifier: str) -> str:
    """Last ``/``-separated component of ``identifier``.

    >>> flatten_identifier("2023/10/13/20231013_588_SDO_VO2.mp4")
    '20231013_588_SDO_VO2.mp4'
    """
    last = identifier.rsplit("/", 1)[-1]
    if not last:
        # fall back to the source identifier
        log_warn(f"failed to flatten {identifier!r}, keeping it as is")
        return identifier
    return last
