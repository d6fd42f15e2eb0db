# error taxonomy shared by the session manager, registry client and views


class RegistryError(Exception):
    """
    Base of every recoverable failure raised by the ledger package.
    user_message is what the presentation shows.
    """

    user_message = "Something went wrong."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


# ---------------------------
# Connecting
# ---------------------------


class WalletConnectionError(RegistryError):
    user_message = "Could not connect to the wallet."


class ProviderMissing(WalletConnectionError):
    user_message = "No wallet provider found. Set REGISTRY_RPC_URL."


class UserRejected(WalletConnectionError):
    user_message = "The wallet did not authorize an account."


class ProviderError(WalletConnectionError):
    user_message = "The wallet provider returned an error."


class NotConnected(RegistryError):
    user_message = "Connect a wallet first."


# ---------------------------
# Submitting & fetching
# ---------------------------


class SubmitError(RegistryError):
    user_message = "Product registration failed."


class FetchError(RegistryError):
    user_message = "Could not load products."


class InvalidPrice(RegistryError, ValueError):
    user_message = "Price must be a non-negative number with at most 18 decimals."


class RejectedByUser(SubmitError):
    user_message = "The transaction was rejected in the wallet."


class Reverted(SubmitError):
    user_message = "The registry contract rejected the transaction."


class NetworkError(SubmitError, FetchError):
    user_message = "Network error while talking to the ledger."


class NotFound(FetchError):
    user_message = "No product with that id."
