"""
Erreurs métier de HydroSleep.
Chaque erreur porte son code HTTP ; main.py les convertit en réponse JSON.
"""
from typing import Optional, Any, Dict


class HydroSleepError(Exception):
    """Exception de base de l'application"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(HydroSleepError):
    """Entrée invalide ou hors bornes (400)"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class NotFoundError(HydroSleepError):
    """Ressource absente ou appartenant à un autre utilisateur (404)"""

    status_code = 404


class BusinessRuleError(HydroSleepError):
    """Règle métier violée, ex. suppression d'un objectif par défaut (400)"""

    status_code = 400


class ConflictError(HydroSleepError):
    """Doublon (user, jour) créé hors du chemin d'upsert (409)"""

    status_code = 409


class StorageError(HydroSleepError):
    """Échec de la couche de persistance ; le détail n'est jamais exposé (500)"""

    status_code = 500
