from typing import Optional

MAC_DELIMITERS = ("-", ":", ".", " ")


def normalize_mac(value: Optional[str]) -> str:
    """
    Приводит MAC к виду "aabbccddeeff".
    ClientId резервации приходит как aa-bb-cc-dd-ee-ff, в аудит-логе — AABBCCDDEEFF,
    после нормализации их можно сравнивать как строки.
    """
    if not value:
        return ""
    mac_clean = value.strip()
    for delimiter in MAC_DELIMITERS:
        mac_clean = mac_clean.replace(delimiter, "")
    return mac_clean.lower()
