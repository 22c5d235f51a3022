#!/usr/bin/env python
"""Script de diagnóstico do fluxo do questionário.

Testa:
1. Os dois ramos completos (múltipla escolha e verdadeiro/falso) via HTTP
2. Rejeição de botão fora do ramo
3. Linha gravada no log CSV (arquivo temporário)

Uso (com o pacote instalado):
    python scripts/diagnose_flow.py
"""

import json
import sys
import tempfile
from pathlib import Path

from fastapi.testclient import TestClient

from survey_flow.api.app import create_app
from survey_flow.config.settings import Settings

MC_PATH = ["start", "pm", "mc", "4b", "6a", "trophy"]
TF_PATH = ["start", "ux", "tf", "5f", "7t", "trophy"]


def check_branch(client, tokens):
    """Percorre um ramo completo e retorna o título da última página."""
    response = client.get("/")
    print(f"  - Cookie: {response.headers.get('set-cookie', '(nenhum)')}")
    for token in tokens:
        response = client.get("/page", params={"button": token})
        if response.status_code != 200:
            print(f"❌ ERRO: status {response.status_code} no botão {token!r}")
            return None
        print(f"  - {token:>7} → HTTP {response.status_code}")

    if "Thank you!" not in response.text:
        print("❌ ERRO: página terminal não foi servida")
        return None
    print("✅ Ramo concluído")
    return response


def check_rejection(client):
    """Botão do ramo errado deve manter a página atual."""
    for token in ["start", "dm", "mc"]:
        client.get("/page", params={"button": token})
    response = client.get("/page", params={"button": "5t"})
    if "What team size do you prefer?" not in response.text:
        print("❌ ERRO: botão inválido alterou a página")
        return False
    print("✅ Botão inválido ignorado (página 4 mantida)")
    return True


def main():
    """Executa bateria de diagnósticos."""
    print("🔍 DIAGNÓSTICO DO FLUXO DO QUESTIONÁRIO\n")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "data.csv"
        settings = Settings(survey_log_path=log_path, survey_log_require_existing=False)
        app = create_app(settings)

        for label, tokens in (("múltipla escolha", MC_PATH), ("verdadeiro/falso", TF_PATH)):
            print(f"\n▶️  Ramo {label}...")
            with TestClient(app) as client:
                if check_branch(client, tokens) is None:
                    print(f"\n❌ FALHA CRÍTICA: ramo {label}")
                    return 1

        print("\n▶️  Rejeição de botão...")
        with TestClient(app) as client:
            if not check_rejection(client):
                return 1

        lines = log_path.read_text(encoding="utf-8").splitlines()
        print("\n" + "=" * 60)
        print("\n✅ TODOS OS DIAGNÓSTICOS PASSARAM")
        print("\n📋 Log CSV gerado:")
        print(json.dumps(lines, indent=2, ensure_ascii=False))
        print(f"\n📊 Sessões ativas: {len(app.state.session_registry)}")
        print("\n" + "=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
