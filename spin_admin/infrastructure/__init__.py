"""Infrastructure: Firestore REST client and Firebase Auth adapter."""
