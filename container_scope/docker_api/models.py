"""Модели контейнеров, портов и сетей в формате, который ждёт сервер отчётов."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from container_scope.docker_api.addressing import AddressingMode
from container_scope.docker_api.exceptions import MalformedContainerError

SHORT_ID_LENGTH = 12  # как в docker ps


def _omit_empty(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value not in (None, "", 0, [])}


@dataclass(slots=True)
class Port:
    """Проброс порта контейнера."""

    private_port: int
    type: str = ""
    public_port: Optional[int] = None  # только для опубликованных портов
    ip: Optional[str] = None

    @classmethod
    def from_engine(cls, raw: Dict[str, Any]) -> "Port":
        return cls(
            private_port=int(raw.get("PrivatePort") or 0),
            type=raw.get("Type") or "",
            public_port=int(raw["PublicPort"]) if raw.get("PublicPort") else None,
            ip=raw.get("IP") or None,
        )

    def matches(self, port: int) -> bool:
        return port in (self.private_port, self.public_port)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"privatePort": self.private_port}
        if self.public_port:
            payload["publicPort"] = self.public_port
        payload["type"] = self.type
        if self.ip:
            payload["ip"] = self.ip
        return payload


@dataclass(slots=True)
class Network:
    """Подключение контейнера к одной сети."""

    network_id: str = ""
    endpoint_id: str = ""
    gateway: str = ""
    ip_address: str = ""
    ip_prefix_len: int = 0
    ipv6_gateway: str = ""
    global_ipv6_address: str = ""
    global_ipv6_prefix_len: int = 0
    mac_address: str = ""
    aliases: List[str] = field(default_factory=list)
    dns_names: List[str] = field(default_factory=list)

    @classmethod
    def from_engine(cls, raw: Dict[str, Any], mode: AddressingMode) -> "Network":
        """Строит запись сети; IP-адрес заполняется только в режиме IP."""

        return cls(
            network_id=raw.get("NetworkID") or "",
            endpoint_id=raw.get("EndpointID") or "",
            gateway=raw.get("Gateway") or "",
            ip_address=(raw.get("IPAddress") or "") if mode is AddressingMode.IP else "",
            ip_prefix_len=int(raw.get("IPPrefixLen") or 0),
            ipv6_gateway=raw.get("IPv6Gateway") or "",
            global_ipv6_address=raw.get("GlobalIPv6Address") or "",
            global_ipv6_prefix_len=int(raw.get("GlobalIPv6PrefixLen") or 0),
            mac_address=raw.get("MacAddress") or "",
            aliases=list(raw.get("Aliases") or []),
            dns_names=list(raw.get("DNSNames") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "networkId": self.network_id,
            "endpointId": self.endpoint_id,
        }
        payload.update(
            _omit_empty(
                {
                    "gateway": self.gateway,
                    "ipAddress": self.ip_address,
                    "ipPrefixLen": self.ip_prefix_len,
                    "ipv6Gateway": self.ipv6_gateway,
                    "globalIPv6Address": self.global_ipv6_address,
                    "globalIPv6PrefixLen": self.global_ipv6_prefix_len,
                    "macAddress": self.mac_address,
                    "aliases": self.aliases,
                    "dnsNames": self.dns_names,
                }
            )
        )
        return payload


@dataclass(slots=True)
class Container:
    """Снимок одного контейнера на момент запроса."""

    id: str
    name: str
    image: str = ""
    state: str = ""
    status: str = ""
    ports: List[Port] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    created: int = 0
    networks: Dict[str, Network] = field(default_factory=dict)
    hostname: str = ""

    @classmethod
    def from_summary(
        cls, summary: Dict[str, Any], hostname: str, mode: AddressingMode
    ) -> "Container":
        """Нормализует запись из списка контейнеров Engine."""

        full_id = summary.get("Id")
        if not isinstance(full_id, str) or len(full_id) < SHORT_ID_LENGTH:
            raise MalformedContainerError(full_id)

        names = summary.get("Names") or []
        name = names[0].removeprefix("/") if names else ""

        raw_networks = (summary.get("NetworkSettings") or {}).get("Networks") or {}
        return cls(
            id=full_id[:SHORT_ID_LENGTH],
            name=name,
            image=summary.get("Image") or "",
            state=summary.get("State") or "",
            status=summary.get("Status") or "",
            ports=[Port.from_engine(port) for port in summary.get("Ports") or []],
            labels=dict(summary.get("Labels") or {}),
            created=int(summary.get("Created") or 0),
            networks={
                network_name: Network.from_engine(endpoint or {}, mode)
                for network_name, endpoint in raw_networks.items()
            },
            hostname=hostname,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует контейнер; пустой список портов отдаётся как null."""

        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "state": self.state,
            "status": self.status,
            "ports": [port.to_dict() for port in self.ports] or None,
            "labels": self.labels,
            "created": self.created,
            "networks": {name: network.to_dict() for name, network in self.networks.items()},
            "hostname": self.hostname,
        }
