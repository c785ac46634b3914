from typing import Optional

from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile

from .convert import to_json_document
from .errors import NoFileSelected
from .models import HealthResponse, SessionResponse, SessionStatus, UploadedFile
from .rules import DOWNLOAD_FILENAME
from .session import ConversionSession

app = FastAPI(
    title="csv-to-json",
    description="Convert a small CSV file into a downloadable JSON document",
    version="0.1.0",
)
app.state.session = ConversionSession()


def _describe(session: ConversionSession) -> SessionResponse:
    state = session.state
    return SessionResponse(
        status=state.status,
        progress_percent=state.progress_percent,
        error_message=state.error_message,
        file_name=session.file.name if session.file is not None else None,
        summary=state.summary,
        download_ready=state.status == SessionStatus.READY,
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/session", response_model=SessionResponse)
def get_session(request: Request):
    return _describe(request.app.state.session)


@app.post("/session/file", response_model=SessionResponse)
async def select_file(request: Request, file: Optional[UploadFile] = File(None)):
    session: ConversionSession = request.app.state.session

    uploaded = None
    if file is not None:
        size = file.size
        if size is None:
            file.file.seek(0, 2)
            size = file.file.tell()
            file.file.seek(0)

        uploaded = UploadedFile(
            name=file.filename or "",
            mime_type=file.content_type or "",
            size_bytes=size,
            content=file.file,
        )

    state = session.select_file(uploaded)
    if state.status == SessionStatus.ERROR:
        raise HTTPException(status_code=422, detail=state.error_message)

    # the spooled upload is closed once the response is sent
    await file.seek(0)
    uploaded.content = await file.read()

    return _describe(session)


@app.post("/session/convert", response_model=SessionResponse, status_code=202)
async def convert(request: Request, wait: bool = False):
    session: ConversionSession = request.app.state.session

    task = session.request_conversion()
    if task is None and session.state.status != SessionStatus.CONVERTING:
        raise HTTPException(status_code=409, detail=NoFileSelected.message)

    if wait:
        await session.wait()

    return _describe(session)


@app.get("/session/result")
def download_result(request: Request):
    state = request.app.state.session.state
    if state.status != SessionStatus.READY:
        raise HTTPException(status_code=409, detail="Conversion result is not ready.")

    return Response(
        content=to_json_document(state.result).encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'},
    )
