from dotenv import load_dotenv
load_dotenv()

import tempfile
from pathlib import Path
from typing import List, NoReturn, Set

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from adapters.java_adapter import JavaAdapter
from emit import output_path
from implementor import Implementor
from registry import TypeNotFound, TypeRegistry
from synth.assembler import impl_class_name
from synth.errors import (
    CompilationFailed,
    ImplerError,
    IOFailure,
)

app = FastAPI(title="Implementor Core (Java type -> Impl source)")
java_adapter = JavaAdapter()
implementor = Implementor()


class JavaFile(BaseModel):
    filename: str
    code: str


class TypesRequest(BaseModel):
    files: List[JavaFile] = Field(min_length=1)


class ImplementRequest(BaseModel):
    type_name: str = Field(min_length=1, description="Canonical or binary name of the type")
    files: List[JavaFile] = Field(min_length=1)


class ImplementResponse(BaseModel):
    class_name: str
    package: str
    path: str
    source: str


def _load(files: List[JavaFile]) -> TypeRegistry:
    try:
        return TypeRegistry.from_sources((f.code, f.filename) for f in files)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _raise_http(e: ImplerError) -> NoReturn:
    if isinstance(e, CompilationFailed):
        status = 502
    elif isinstance(e, IOFailure):
        status = 500
    else:
        status = 422
    raise HTTPException(status_code=status, detail=f"{type(e).__name__}: {e}")


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/types")
def types(req: TypesRequest):
    registry = _load(req.files)
    return {"types": registry.graph.to_debug_json()}


@app.post("/implement/source", response_model=ImplementResponse)
def implement_source(req: ImplementRequest):
    registry = _load(req.files)
    try:
        token = registry.resolve(req.type_name)
    except TypeNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        source = implementor.generate_source(token)
    except ImplerError as e:
        _raise_http(e)

    return ImplementResponse(
        class_name=impl_class_name(token),
        package=token.package,
        path=output_path(Path(), token).as_posix(),
        source=source,
    )


@app.post("/implement/jar")
def implement_jar(req: ImplementRequest):
    with tempfile.TemporaryDirectory() as td:
        # lay the uploaded files out by package so javac finds them on the sourcepath
        src_root = Path(td) / "src"
        written: Set[Path] = set()
        for f in req.files:
            try:
                package = java_adapter.package_of(f.code)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"{f.filename}: {e}")
            dest = src_root.joinpath(*package.split(".")) if package else src_root
            target = dest / Path(f.filename).name
            if target in written:
                raise HTTPException(
                    status_code=400,
                    detail=f"{f.filename}: duplicate file {target.relative_to(src_root).as_posix()}",
                )
            written.add(target)
            dest.mkdir(parents=True, exist_ok=True)
            target.write_text(f.code, encoding="utf-8")

        try:
            registry = TypeRegistry.from_source_roots([src_root])
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            token = registry.resolve(req.type_name)
        except TypeNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))

        jar_path = Path(td) / "out" / f"{impl_class_name(token)}.jar"
        try:
            implementor.implement_jar(token, jar_path)
        except ImplerError as e:
            _raise_http(e)
        content = jar_path.read_bytes()

    return Response(
        content=content,
        media_type="application/java-archive",
        headers={"Content-Disposition": f'attachment; filename="{jar_path.name}"'},
    )
