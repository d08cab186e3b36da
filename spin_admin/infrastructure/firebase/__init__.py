"""Firestore REST client and Firebase Auth adapter."""

from spin_admin.infrastructure.firebase.auth import FirebaseAuthClient
from spin_admin.infrastructure.firebase.client import FirebaseApp, init_firebase

__all__ = [
    "FirebaseApp",
    "FirebaseAuthClient",
    "init_firebase",
]
