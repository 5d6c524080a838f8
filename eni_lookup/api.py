import logging

from flask import Flask, current_app, jsonify, request

from eni_lookup.client import EniClient
from eni_lookup.errors import EniLookupError, http_status

logger = logging.getLogger(__name__)

app = Flask(__name__)


def get_client() -> EniClient:
    """Return the configured EniClient, building one from the environment on first use."""
    client = current_app.config.get('ENI_CLIENT')
    if client is None:
        client = EniClient.from_settings()
        current_app.config['ENI_CLIENT'] = client
    return client


@app.errorhandler(EniLookupError)
def handle_lookup_error(e):
    logger.warning(f"Lookup failed: {e}")
    return jsonify({'error': str(e)}), http_status(e)


@app.errorhandler(ValueError)
def handle_bad_request(e):
    return jsonify({'error': str(e)}), 400


@app.route('/api/eni', methods=['GET'])
def list_enis():
    # No id argument lists everything; ?id=a&id=b narrows to those interfaces
    eni_ids = [i for i in request.args.getlist('id') if i] if 'id' in request.args else None
    enis = get_client().describe_enis(eni_ids)
    return jsonify({
        'network_interfaces': [eni.to_dict() for eni in enis],
        'metadata': {'count': len(enis)},
    })


@app.route('/api/eni/<eni_id>', methods=['GET'])
def get_eni(eni_id):
    return jsonify(get_client().describe_eni_by_id(eni_id).to_dict())


@app.route('/api/instance', methods=['GET'])
def list_instances():
    instance_ids = [i for i in request.args.getlist('id') if i]
    if not instance_ids:
        return jsonify({'error': 'at least one id query argument is required'}), 400

    instances = get_client().describe_instances_by_ids(instance_ids)
    return jsonify({
        'instances': [instance.to_dict() for instance in instances],
        'metadata': {'count': len(instances), 'requested': len(instance_ids)},
    })


@app.route('/api/instance/<instance_id>', methods=['GET'])
def get_instance(instance_id):
    return jsonify(get_client().describe_instance_by_id(instance_id).to_dict())


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8000, debug=True)
