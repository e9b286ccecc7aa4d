"""
Envoi d'emails SMTP avec pool de connexions.
- Le pool est créé une fois par le lifespan (app.state.mailer) et fermé à l'arrêt
- Chaque envoi emprunte une connexion (connection()) et la rend au pool
- Une connexion qui a levé une erreur est fermée et jetée, jamais rendue
- Pas de retry: l'exception SMTP remonte à l'appelant
"""
import logging
import queue
import smtplib
import threading
from contextlib import contextmanager
from email.message import EmailMessage
from typing import Iterator, List, Optional, Protocol

from fastapi import Request

from storefront import config

logger = logging.getLogger(__name__)

class Mailer(Protocol):
    def send(self, to: str, subject: str, text: str) -> None: ...

class SmtpMailer:
    def __init__(
        self,
        host: str,
        port: int,
        user: Optional[str] = None,
        password: Optional[str] = None,
        *,
        sender: str,
        starttls: bool = False,
        timeout: int = 10,
        pool_size: int = 2,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.starttls = starttls
        self.timeout = timeout
        self.pool_size = pool_size
        self._idle: "queue.LifoQueue[smtplib.SMTP]" = queue.LifoQueue(maxsize=pool_size)
        # Borne le nombre de connexions ouvertes simultanément
        self._slots = threading.BoundedSemaphore(pool_size)
        self._closed = False

    @classmethod
    def from_config(cls) -> "SmtpMailer":
        return cls(
            config.SMTP_HOST,
            config.SMTP_PORT,
            config.SMTP_USER,
            config.SMTP_PASS,
            sender=config.EMAIL_FROM,
            starttls=config.SMTP_STARTTLS,
            timeout=config.SMTP_TIMEOUT_SECONDS,
            pool_size=config.SMTP_POOL_SIZE,
        )

    def _connect(self) -> smtplib.SMTP:
        smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if self.starttls:
                smtp.starttls()
            if self.user:
                smtp.login(self.user, self.password or "")
        except BaseException:
            # Socket ouvert mais session inutilisable: fermé avant de remonter l'erreur
            self._discard(smtp)
            raise
        logger.info("smtp connection opened host=%s port=%s", self.host, self.port)
        return smtp

    @staticmethod
    def _discard(smtp: smtplib.SMTP) -> None:
        try:
            smtp.quit()
        except (smtplib.SMTPException, OSError):
            smtp.close()

    def _is_alive(self, smtp: smtplib.SMTP) -> bool:
        try:
            status, _ = smtp.noop()
            return status == 250
        except (smtplib.SMTPException, OSError):
            return False

    def _acquire(self) -> smtplib.SMTP:
        while True:
            try:
                smtp = self._idle.get_nowait()
            except queue.Empty:
                return self._connect()
            if self._is_alive(smtp):
                return smtp
            self._discard(smtp)

    @contextmanager
    def connection(self) -> Iterator[smtplib.SMTP]:
        """
        Emprunte une connexion SMTP du pool pour la durée du bloc.
        - Rendue au pool en sortie normale, fermée si le bloc a levé une exception.
        """
        if self._closed:
            raise RuntimeError("SmtpMailer is closed")
        self._slots.acquire()
        smtp = None
        try:
            smtp = self._acquire()
            yield smtp
        except BaseException:
            if smtp is not None:
                self._discard(smtp)
                smtp = None
            raise
        finally:
            if smtp is not None and self._closed:
                # close() appelé pendant l'envoi: la connexion ne retourne pas au pool
                self._discard(smtp)
                smtp = None
            if smtp is not None:
                try:
                    self._idle.put_nowait(smtp)
                except queue.Full:
                    self._discard(smtp)
            self._slots.release()

    def build_message(self, to: str, subject: str, text: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text)
        return msg

    def send(self, to: str, subject: str, text: str) -> None:
        """Envoie un email texte brut; lève l'erreur SMTP en cas d'échec."""
        msg = self.build_message(to, subject, text)
        with self.connection() as smtp:
            smtp.send_message(msg)
        logger.info("mail sent to=%s subject=%s", to, subject)

    def idle_connections(self) -> List[smtplib.SMTP]:
        return list(self._idle.queue)

    def close(self) -> None:
        self._closed = True
        while True:
            try:
                smtp = self._idle.get_nowait()
            except queue.Empty:
                break
            self._discard(smtp)

def get_mailer(request: Request) -> SmtpMailer:
    """
    Dépendance FastAPI: mailer partagé créé par le lifespan.
    - Créé à la demande si l'app tourne sans lifespan (ex: TestClient sans contexte).
    """
    mailer = getattr(request.app.state, "mailer", None)
    if mailer is None:
        mailer = SmtpMailer.from_config()
        request.app.state.mailer = mailer
    return mailer
