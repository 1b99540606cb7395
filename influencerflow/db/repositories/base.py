from sqlalchemy.orm import Session


class Repository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, obj):
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def apply(self, obj, **fields):
        for key, value in fields.items():
            setattr(obj, key, value)
        return self.save(obj)
