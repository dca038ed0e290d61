"""
Cliente do armazém remoto de documentos JSON (API de conteúdos do GitHub).

Cada coleção é um arquivo `<caminho>/<arquivo>.json`; o conteúdo trafega em base64
e cada gravação precisa do `sha` da versão anterior.
"""
import base64
import json
import logging
from typing import Any, Dict, List, Optional

import requests

from mobiliar.core.exceptions import PersistenciaError

logger = logging.getLogger(__name__)


class GitHubArmazemDocumentos:
    """Implementa IArmazemDocumentos sobre a GitHub Contents API."""

    API_BASE = "https://api.github.com"

    def __init__(self, token: str, owner: str, repo: str, branch: str = 'main',
                 caminho: str = 'Docs/Data', timeout: int = 10, session: Optional[requests.Session] = None):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.caminho = caminho.strip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("GITHUB_TOKEN não configurado. Gravações no armazém falharão.")
        self._shas: Dict[str, str] = {}

    def _url(self, arquivo: str) -> str:
        return f"{self.API_BASE}/repos/{self.owner}/{self.repo}/contents/{self.caminho}/{arquivo}"

    def _buscar(self, arquivo: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.session.get(
                self._url(arquivo), headers=self.headers, params={'ref': self.branch}, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise PersistenciaError(f"Erro de conexão com o GitHub ao ler {arquivo}: {e}")

        if response.status_code == 404:
            return None
        if not response.ok:
            raise PersistenciaError(f"GitHub respondeu {response.status_code} ao ler {arquivo}.")
        return response.json()

    def ler(self, arquivo: str) -> Optional[List[Dict[str, Any]]]:
        """Retorna os registros do documento, ou None se ele ainda não existir."""
        metadados = self._buscar(arquivo)
        if metadados is None:
            self._shas.pop(arquivo, None)
            return None

        self._shas[arquivo] = metadados.get('sha')
        try:
            conteudo = base64.b64decode(metadados.get('content', '')).decode('utf-8')
            registros = json.loads(conteudo)
        except (ValueError, UnicodeDecodeError) as e:
            raise PersistenciaError(f"Documento {arquivo} não é um JSON válido: {e}")

        if not isinstance(registros, list):
            raise PersistenciaError(f"Documento {arquivo} deveria conter uma lista.")
        return registros

    def gravar(self, arquivo: str, registros: List[Dict[str, Any]], mensagem: str) -> None:
        """Cria ou atualiza o documento. Falhas viram PersistenciaError."""
        sha = self._shas.get(arquivo)
        if sha is None:
            metadados = self._buscar(arquivo)
            sha = metadados.get('sha') if metadados else None

        conteudo = json.dumps(registros, indent=2, ensure_ascii=False).encode('utf-8')
        payload = {
            "message": mensagem,
            "content": base64.b64encode(conteudo).decode('ascii'),
            "branch": self.branch,
        }
        if sha:
            payload["sha"] = sha

        try:
            response = self.session.put(self._url(arquivo), json=payload, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise PersistenciaError(f"Erro de conexão com o GitHub ao gravar {arquivo}: {e}")

        if not response.ok:
            raise PersistenciaError(f"GitHub respondeu {response.status_code} ao gravar {arquivo}.")

        novo_sha = (response.json().get('content') or {}).get('sha')
        if novo_sha:
            self._shas[arquivo] = novo_sha
        logger.info("Documento %s gravado no GitHub (%d registros).", arquivo, len(registros))
