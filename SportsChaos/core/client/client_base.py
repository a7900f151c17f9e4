class Client:
    """
    Base client class holding the auth service address.
    """

    def __init__(self, base_url: str):
        """
        Initialize client with connection parameters.

        Args:
            base_url (str): Root URL of the auth service
        """
        self.base_url = base_url

    async def run(self):
        """
        Abstract method to start the client.
        Must be implemented by subclasses.
        """
        raise NotImplementedError
