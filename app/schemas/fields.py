from typing import Annotated

from pydantic import StringConstraints

# required text: surrounding blanks are dropped, nothing left is an error
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
