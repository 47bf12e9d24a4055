import logging

from fastapi import APIRouter, HTTPException, Request, status, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from storefront.models.schemas import ContactRequest, ContactResponse, FooterView, FormStatus
from storefront.services.contact_form import ContactFormController, ContactFormSubmitter, MissingFieldsError
from storefront.services.footer import FooterBuilder
from storefront.services.home import HomePage
from storefront.services.loader import HomePageLoader
from storefront.services.storefront_client import StorefrontClient

logger = logging.getLogger(__name__)
router = APIRouter()


# Dependency injection for services
def get_storefront_client(request: Request) -> StorefrontClient:
    client = getattr(request.app.state, "storefront", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storefront API client is not initialized"
        )
    return client


def get_home_loader(storefront: StorefrontClient = Depends(get_storefront_client)) -> HomePageLoader:
    return HomePageLoader(storefront)


def get_footer_builder(storefront: StorefrontClient = Depends(get_storefront_client)) -> FooterBuilder:
    return FooterBuilder(storefront)


def get_contact_submitter() -> ContactFormSubmitter:
    return ContactFormSubmitter()


@router.get("/home")
async def home_page(loader: HomePageLoader = Depends(get_home_loader)):
    """
    Render the home page progressively

    **Returns:**
    - application/x-ndjson stream: a `frame` line (title, featured collection,
      promo bar, placeholders), then one `region` line per deferred region in
      the order the regions settle

    **Error Codes:**
    - 502: the featured collection query failed
    """
    # Critical data is awaited here, so a failure still produces a normal error response
    load_result = await loader.load()
    page = HomePage(load_result)
    logger.info("Home page critical data loaded, streaming deferred regions")

    return StreamingResponse(page.stream(), media_type="application/x-ndjson")


@router.get("/footer", response_model=FooterView)
async def footer(builder: FooterBuilder = Depends(get_footer_builder)):
    """Footer content with quick links derived from the header menu"""
    return await builder.render()


@router.post("/contact", response_model=ContactResponse)
async def submit_contact(
        request: ContactRequest,
        submitter: ContactFormSubmitter = Depends(get_contact_submitter)
):
    """
    Forward a contact form submission to the configured endpoint

    **Returns:**
    - 200 with status "success" and cleared fields
    - 502 with status "error", the submitted fields and an error message
    """
    controller = ContactFormController(submitter)
    controller.fill(request.name, request.email, request.message)
    try:
        await controller.submit()
    except MissingFieldsError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )

    response = controller.to_response()
    if controller.state.status == FormStatus.ERROR:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=response.model_dump(mode="json")
        )
    return response


@router.get("/health")
async def health_check():
    """Health check for the API routes"""
    return {
        "status": "healthy",
        "service": "Fabric Elite Storefront API",
        "endpoints_available": [
            "/home",
            "/footer",
            "/contact",
            "/health"
        ]
    }
