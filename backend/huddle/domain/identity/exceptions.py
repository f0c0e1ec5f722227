"""Domain-level exceptions for accounts."""

from __future__ import annotations

from huddle.domain.common.exceptions import HuddleError


class IdentityError(HuddleError):
	"""Base class for account errors."""


class UserNotFound(IdentityError):
	reason = "not_found"
	message = "User not found."


class UsernameRequired(IdentityError):
	reason = "username_required"
	message = "Username cannot be empty."


class PasswordRequired(IdentityError):
	reason = "password_required"
	message = "Password is required for registration."


class UsernameTaken(IdentityError):
	reason = "username_taken"
	message = "Username already exists. Please choose a different one."


class InvalidCredentials(IdentityError):
	reason = "invalid_credentials"
	message = "Invalid username or password."
