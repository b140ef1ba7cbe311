"""Actions for the service catalog and the photo gallery."""

from party_planner_api.app.schemas.photo import PhotoCreate, PhotoUpdate
from party_planner_api.app.schemas.service import ServiceCreate, ServiceUpdate
from party_planner_api.app.services.catalog_service import CatalogService
from party_planner_api.app.services.gallery_service import GalleryService

from .base import ActionMessages, CrudActions


service_actions = CrudActions(
    label="service",
    service=CatalogService,
    create_schema=ServiceCreate,
    update_schema=ServiceUpdate,
    messages=ActionMessages(
        added="Servicio añadido con éxito.",
        updated="Servicio actualizado con éxito.",
        deleted="Servicio eliminado con éxito.",
        add_failed="Error al añadir el servicio",
        update_failed="Error al actualizar el servicio",
        delete_failed="Error al eliminar el servicio",
        id_required_update="Se requiere el ID del servicio para actualizar.",
        id_required_delete="Se requiere el ID del servicio para eliminar.",
        not_found="Servicio con ID {id} no encontrado.",
        not_found_delete="Servicio con ID {id} no encontrado o no se pudo eliminar.",
        append_error_on_update=True,
    ),
    list_paths=("/", "/#services", "/admin/services"),
    edit_path="/admin/edit-service/{id}",
)

photo_actions = CrudActions(
    label="photo",
    service=GalleryService,
    create_schema=PhotoCreate,
    update_schema=PhotoUpdate,
    messages=ActionMessages(
        added="Foto añadida con éxito.",
        updated="Foto actualizada con éxito.",
        deleted="Foto eliminada con éxito.",
        add_failed="Error al añadir la foto",
        update_failed="Error al actualizar la foto",
        delete_failed="Error al eliminar la foto",
        id_required_update="Se requiere el ID de la foto para actualizar.",
        id_required_delete="Se requiere el ID de la foto para eliminar.",
        not_found="Foto con ID {id} no encontrada.",
        not_found_delete="Foto con ID {id} no encontrada o no se pudo eliminar.",
        append_error_on_add=True,
        append_error_on_update=True,
    ),
    list_paths=("/", "/#gallery", "/admin/gallery"),
    edit_path="/admin/edit-photo/{id}",
)

add_service_action = service_actions.add
update_service_action = service_actions.update
delete_service_action = service_actions.delete

add_photo_action = photo_actions.add
update_photo_action = photo_actions.update
delete_photo_action = photo_actions.delete
