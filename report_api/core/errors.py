from fastapi import Request
from fastapi.responses import JSONResponse

GENERIC_FAILURE_MESSAGE = (
    "Une erreur est survenue lors de la génération du rapport. "
    "Vérifiez votre connexion et la clé OPENAI_API_KEY côté serveur."
)

class ReportError(Exception):
    """
    Base for every failure the report endpoint turns into an {"error": ...} body.
    The message is user-facing (French); details belong in the logs.
    """
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class ConfigurationError(ReportError):
    status_code = 500

    def __init__(self, message: str = "Clé API manquante. Configurez OPENAI_API_KEY côté serveur."):
        super().__init__(message)

class PayloadValidationError(ReportError):
    status_code = 400

    def __init__(self, message: str = "Adresse, type de bien, niveau de détail et notes sont requis."):
        super().__init__(message)

class EmptyCompletionError(ReportError):
    status_code = 500

    def __init__(self, message: str = "Réponse vide du modèle."):
        super().__init__(message)

class UpstreamError(ReportError):
    status_code = 500

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)

class ClientDisconnectedError(ReportError):
    # nginx convention for "client closed request"
    status_code = 499

    def __init__(self, message: str = "Requête annulée par le client."):
        super().__init__(message)

async def report_error_handler(request: Request, exc: ReportError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

