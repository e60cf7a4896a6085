from sqlalchemy.orm import Session

from app.data.models.setting import SettingModel


class SettingsRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> str | None:
        row = self.db.get(SettingModel, key)
        return row.value if row else None

    def set_value(self, key: str, value: str):
        row = self.db.get(SettingModel, key)
        if row:
            row.value = value
        else:
            self.db.add(SettingModel(key=key, value=value))
        self.db.commit()
