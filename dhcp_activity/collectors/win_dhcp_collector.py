import os
import subprocess
from typing import List, Optional

import winrm
from loguru import logger

from dhcp_activity.errors import HostApiError
from dhcp_activity.models import Reservation, Scope
from dhcp_activity.parsers.dhcp import parse_audit_log_path, parse_reservations, parse_scopes

SCOPES_CMD = r"""
[Console]::OutputEncoding = [System.Text.Encoding]::UTF8
Get-DhcpServerv4Scope -ComputerName '{server}' |
    Select-Object ScopeId, Name, State | Format-List
"""

# AddressState у резервации есть только в аренде, поэтому берём его из Get-DhcpServerv4Lease
RESERVATIONS_CMD = r"""
[Console]::OutputEncoding = [System.Text.Encoding]::UTF8
Get-DhcpServerv4Reservation -ComputerName '{server}' -ScopeId {scope_id} | ForEach-Object {{
    $lease = Get-DhcpServerv4Lease -ComputerName '{server}' -IPAddress $_.IPAddress -ErrorAction SilentlyContinue
    [PSCustomObject]@{{
        IPAddress    = $_.IPAddress
        ScopeId      = $_.ScopeId
        ClientId     = $_.ClientId
        Name         = $_.Name
        Description  = $_.Description
        Type         = $_.Type
        AddressState = if ($lease) {{ $lease.AddressState }} else {{ 'Unknown' }}
    }}
}} | Format-List
"""

AUDIT_LOG_CMD = r"""
[Console]::OutputEncoding = [System.Text.Encoding]::UTF8
Get-DhcpServerAuditLog -ComputerName '{server}' | Select-Object Path, Enable | Format-List
"""


class LocalPowerShell:
    """PowerShell на этой же машине через powershell.exe."""

    def __init__(self, executable: str = "powershell.exe"):
        self.executable = executable

    def run(self, script: str) -> str:
        try:
            result = subprocess.run(
                [self.executable, "-NoProfile", "-NonInteractive", "-Command", script],
                capture_output=True,
            )
        except OSError as e:
            raise HostApiError(f"Не удалось запустить {self.executable}: {e}") from e

        std_out = result.stdout.decode("utf-8", errors="replace")
        std_err = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0 or (std_err.strip() and not std_out.strip()):
            raise HostApiError(std_err.strip() or f"PowerShell вернул код {result.returncode}")
        return std_out


class WinRMPowerShell:
    """PowerShell через локальный WSMan-эндпоинт (pywinrm)."""

    def __init__(self, endpoint: str, username: Optional[str] = None, password: Optional[str] = None):
        self.endpoint = endpoint
        self.username = username if username is not None else os.getenv("WINRM_USERNAME")
        self.password = password if password is not None else os.getenv("WINRM_PASSWORD")
        self._session = None

    @property
    def session(self):
        if self._session is None:
            try:
                self._session = winrm.Session(
                    self.endpoint,
                    auth=(self.username, self.password),
                    transport="ntlm",
                    server_cert_validation="ignore",
                )
            except Exception as e:
                raise HostApiError(f"Не удалось подключиться к {self.endpoint}: {e}") from e
            logger.debug(f"[DHCP] WinRM-сессия создана: {self.endpoint}")
        return self._session

    def run(self, script: str) -> str:
        try:
            result = self.session.run_ps(script)
        except HostApiError:
            raise
        except Exception as e:
            raise HostApiError(f"WinRM: {e}") from e

        std_out = result.std_out.decode("utf-8", errors="replace")
        if result.status_code != 0:
            std_err = result.std_err.decode("utf-8", errors="replace")
            raise HostApiError(std_err.strip() or f"PowerShell вернул код {result.status_code}")
        return std_out


class WinDhcpHost:
    """Управляющий интерфейс Windows DHCP: scope, резервации, путь к аудит-логам."""

    def __init__(self, shell, server_name: str):
        self.shell = shell
        self.server_name = server_name

    def list_scopes(self) -> List[Scope]:
        logger.debug(f"[DHCP] Запрашиваем scope у {self.server_name}")
        text = self.shell.run(SCOPES_CMD.format(server=self.server_name))
        return parse_scopes(text)

    def list_reservations(self, scope_id: str) -> List[Reservation]:
        logger.debug(f"[DHCP] Запрашиваем резервации scope {scope_id}")
        text = self.shell.run(RESERVATIONS_CMD.format(server=self.server_name, scope_id=scope_id))
        return parse_reservations(text, scope_id)

    def get_audit_log_directory(self) -> Optional[str]:
        text = self.shell.run(AUDIT_LOG_CMD.format(server=self.server_name))
        return parse_audit_log_path(text)


def build_host(settings) -> WinDhcpHost:
    if settings.transport == "winrm":
        shell = WinRMPowerShell(settings.winrm_endpoint)
    else:
        shell = LocalPowerShell()
    return WinDhcpHost(shell, settings.server_name)
