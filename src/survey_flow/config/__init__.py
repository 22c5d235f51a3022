"""Configurações centralizadas do survey_flow.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- Constantes de endereço padrão (LOCAL_BIND_*, FLY_BIND_*)

Uso típico:
    from survey_flow.config import get_settings
"""

from survey_flow.config.settings import (
    FLY_BIND_HOST,
    FLY_BIND_PORT,
    LOCAL_BIND_HOST,
    LOCAL_BIND_PORT,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "LOCAL_BIND_HOST",
    "LOCAL_BIND_PORT",
    "FLY_BIND_HOST",
    "FLY_BIND_PORT",
]
