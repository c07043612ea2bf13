from typing import Literal


existing_resources = Literal["secure_key"]
