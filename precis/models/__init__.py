from precis.models.url_record import UrlRecord


__all__ = ['UrlRecord']
