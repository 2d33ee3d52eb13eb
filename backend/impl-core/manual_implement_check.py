import requests

IMPL_URL = "http://127.0.0.1:7070/implement/source"
JAR_URL = "http://127.0.0.1:7070/implement/jar"

FILE_PATH = "Shape.java"  # adjust this
TYPE_NAME = "demo.Shape"


def main():
    # 0) Read code
    with open(FILE_PATH, "r", encoding="utf-8") as f:
        code = f.read()

    payload = {
        "type_name": TYPE_NAME,
        "files": [{"filename": FILE_PATH, "code": code}],
    }

    # 1) Type -> Impl source
    resp = requests.post(IMPL_URL, json=payload)
    resp.raise_for_status()
    data = resp.json()

    print(f"=== {data['path']} ===")
    print(data["source"])

    # 2) Type -> compiled jar (needs javac on the server)
    jar_resp = requests.post(JAR_URL, json=payload)
    if jar_resp.status_code != 200:
        print("Jar generation failed:", jar_resp.json().get("detail"))
        return

    jar_name = f"{data['class_name']}.jar"
    with open(jar_name, "wb") as f:
        f.write(jar_resp.content)
    print(f"Saved jar to {jar_name}")


if __name__ == "__main__":
    main()
