"""
HTTP interface to an ACL Manager.

    GET  {root}/        list all ACLs (admin only)
    GET  {root}/{name}  get the members of an ACL
    PUT  {root}/{name}  replace the members of an ACL
    POST {root}/{name}  add or remove members of an ACL

Each endpoint authenticates the request and authorizes it against the ACL
it names before the handler body runs.
"""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status

from ..auth.identity import Authenticator, Identity
from ..manager.authorization import RequestAuthorization
from ..manager.naming import ADMIN_ACL
from .errors import add_exception_handlers
from .middleware import RequestLoggingMiddleware
from .schemas import GetACLResponse, GetACLsResponse, ModifyACLRequest, SetACLRequest

if TYPE_CHECKING:
    from ..manager.manager import Manager


def normalize_root_path(root_path: str) -> str:
    """'/' and '' mean no prefix; otherwise one leading slash and no trailing slash."""
    root_path = (root_path or "").strip().strip("/")
    return "/" + root_path if root_path else ""


def create_router(manager: "Manager", authenticate: Authenticator) -> APIRouter:
    """Build the ACL routes, each guarded by the authorization flow."""
    router = APIRouter(tags=["acl"])

    async def authorize_named_acl(request: Request, name: str) -> Identity:
        return await RequestAuthorization(manager, authenticate, name).run(request)

    async def authorize_admin(request: Request) -> Identity:
        # Listing has no target ACL; it is treated as access to the admin ACL.
        return await RequestAuthorization(manager, authenticate, ADMIN_ACL).run(request)

    @router.get("/", response_model=GetACLsResponse)
    async def get_acls(identity: Identity = Depends(authorize_admin)):
        """Return the names of all ACLs. Only administrators may list ACLs."""
        return GetACLsResponse(acls=await manager.list_acls())

    @router.get("/{name}", response_model=GetACLResponse)
    async def get_acl(name: str, identity: Identity = Depends(authorize_named_acl)):
        """
        Return the members of the ACL. Only administrators and members of
        the meta-ACL for the name may access this endpoint.
        """
        return GetACLResponse(users=await manager.get_acl(name))

    @router.put("/{name}")
    async def set_acl(name: str, body: SetACLRequest, identity: Identity = Depends(authorize_named_acl)):
        """Replace the members of the ACL."""
        await manager.set_acl(name, body.users or [])
        return Response(status_code=status.HTTP_200_OK)

    @router.post("/{name}")
    async def modify_acl(name: str, body: ModifyACLRequest, identity: Identity = Depends(authorize_named_acl)):
        """Add users to or remove users from the ACL, but not both at once."""
        await manager.modify_acl(name, add=body.add or [], remove=body.remove or [])
        return Response(status_code=status.HTTP_200_OK)

    return router


def create_handler(manager: "Manager", root_path: str, authenticate: Authenticator) -> FastAPI:
    """Create the ASGI application serving manager's ACLs under root_path."""
    app = FastAPI(
        title="ACL Store",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.add_middleware(RequestLoggingMiddleware)
    add_exception_handlers(app)
    app.include_router(create_router(manager, authenticate), prefix=normalize_root_path(root_path))
    app.state.manager = manager
    return app
