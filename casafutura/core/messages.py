from casafutura.core.config import settings
from casafutura.domain.errors import ErrorKind


class Messages:
    """
    Centralized store for user-facing messages.
    Uses settings for dynamic content.
    """

    @property
    def MISSING_DATES(self) -> str:
        return "Per favore, seleziona le date di arrivo e partenza dal calendario."

    @property
    def INVERTED_RANGE(self) -> str:
        return "La data di partenza deve essere successiva a quella di arrivo."

    @property
    def RANGE_NO_LONGER_AVAILABLE(self) -> str:
        return (
            "Le date selezionate non sono più disponibili. "
            "Scegli un altro periodo dal calendario."
        )

    @property
    def DATA_FETCH_FAILED(self) -> str:
        return "Impossibile caricare i dati. Riprova più tardi."

    @property
    def HOUSE_NOT_FOUND(self) -> str:
        return "Casa non trovata."

    @property
    def BOOKING_NOT_FOUND(self) -> str:
        return "Prenotazione non trovata."

    @property
    def HOLIDAY_NOT_FOUND(self) -> str:
        return "Periodo di chiusura non trovato."

    @property
    def TOO_MANY_GUESTS(self) -> str:
        return "Il numero di ospiti supera la capienza della casa."

    @property
    def INVALID_CREDENTIALS(self) -> str:
        return "Credenziali non valide. Riprova."

    @property
    def EMAIL_TAKEN(self) -> str:
        return "Un utente con questa email esiste già."

    @property
    def HOUSE_ID_TAKEN(self) -> str:
        return "Esiste già una casa con questo titolo."

    @property
    def STORAGE_CONFLICT(self) -> str:
        return "I dati sono stati modificati nel frattempo. Ricarica e riprova."

    @property
    def BOOKING_RECEIVED(self) -> str:
        return (
            f"Grazie! La tua richiesta per {settings.project_name} è stata inviata. "
            f"Riceverai una conferma dal gestore."
        )

    def for_kind(self, kind: ErrorKind) -> str:
        return {
            ErrorKind.MISSING_DATES: self.MISSING_DATES,
            ErrorKind.INVERTED_RANGE: self.INVERTED_RANGE,
            ErrorKind.RANGE_NO_LONGER_AVAILABLE: self.RANGE_NO_LONGER_AVAILABLE,
            ErrorKind.DATA_FETCH_FAILED: self.DATA_FETCH_FAILED,
        }[kind]


messages = Messages()
