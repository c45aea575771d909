from fastapi import Depends

from app.core.current_user import Identity, get_current_identity
from app.core.errors import Forbidden, Unauthorized


def require_auth(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_authenticated:
        raise Unauthorized()
    return identity


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    # anonymous callers get 403 here too, not 401
    if not identity.is_admin:
        raise Forbidden()
    return identity
